# common functions

import sys
import time
import shutil

console_width = shutil.get_terminal_size((80, 24))[0] - 2


def timestamp():
    return time.strftime('[%Y-%m-%d %H:%M:%S]')


def print_msg(msg=None, left_align=True, line_feed=False, stream=None):
    '''
    Status output, always on stderr so stdout only carries findings.
    msg:        text to print, prefixed with a timestamp
    left_align: pad on the right (default) or on the left
    line_feed:  keep the line; otherwise the next call overwrites it
    '''
    stream = stream or sys.stderr
    msg = '%s %s' % (timestamp(), msg or '')
    if left_align:
        stream.write('\r' + msg + ' ' * (console_width - len(msg)))
    else:  # right align
        stream.write('\r' + ' ' * (console_width - len(msg)) + msg)
    if line_feed:
        stream.write('\n')
    stream.flush()


def print_open_resolver(address):
    sys.stdout.write('!!! Got answer from %s - possible open resolver!\n' % address)
    sys.stdout.flush()


def user_abort(sig, frame):
    print_msg('[ERROR] User aborted the scan!', line_feed=True)
    sys.exit(1)
