# -*- encoding: utf-8 -*-

OPEN_RESOLVER = 'open_resolver'
NO_ANSWER = 'no_answer'
TIMED_OUT = 'timed_out'

CATEGORIES = (OPEN_RESOLVER, NO_ANSWER, TIMED_OUT)


def classify(response, timed_out=False):
    '''
    Decide what a finished probe tells us about its target.
    :param response:  dns.message.Message harvested from the target, or None
    :param timed_out: True when the probe was retired before any response
    :return: one of OPEN_RESOLVER, NO_ANSWER, TIMED_OUT
    '''
    if timed_out:
        return TIMED_OUT
    if response is None:
        return NO_ANSWER
    answer = getattr(response, 'answer', None)
    if answer:
        return OPEN_RESOLVER
    return NO_ANSWER
