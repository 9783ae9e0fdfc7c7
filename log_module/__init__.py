"""
ISC License

Copyright (c) 2023 Eric Chickering <eric.chickering@gmail.com>

Permission to use, copy, modify, and/or distribute this software for any
purpose with or without fee is hereby granted, provided that the above
copyright notice and this permission notice appear in all copies.

THE SOFTWARE IS PROVIDED "AS IS" AND THE AUTHOR DISCLAIMS ALL WARRANTIES
WITH REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF
MERCHANTABILITY AND FITNESS. IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR
ANY SPECIAL, DIRECT, INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES
WHATSOEVER RESULTING FROM LOSS OF USE, DATA OR PROFITS, WHETHER IN AN ACTION
OF CONTRACT, NEGLIGENCE OR OTHER TORTIOUS ACTION, ARISING OUT OF OR IN
CONNECTION WITH THE USE OR PERFORMANCE OF THIS SOFTWARE.

"""
import logging
import os
import re
import time
from logging.handlers import TimedRotatingFileHandler

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'
RUN_MARKER = '===== Run start: {} ====='
REPORTED_LEVELS = ('WARNING', 'ERROR', 'CRITICAL')
MAX_LOG_AGE = 24 * 60 * 60

# First line of a record: a formatted log line or a run marker
RECORD_START = re.compile(r'^(?:===== Run start: )?(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})')


def record_timestamp(line):
    """ Epoch seconds when the line opens a record, None for continuation lines. """
    match = RECORD_START.match(line)
    if not match:
        return None
    try:
        return time.mktime(time.strptime(match.group(1), TIMESTAMP_FORMAT))
    except ValueError:
        return None


def group_records(lines):
    """
    Yield (timestamp, lines) for each record.

    Traceback lines written with exc_info stay with the entry that logged them.
    Lines ahead of the first record have no timestamp and are dropped.
    """
    timestamp, record = None, []
    for line in lines:
        line_timestamp = record_timestamp(line)
        if line_timestamp is not None:
            if record:
                yield timestamp, record
            timestamp, record = line_timestamp, [line]
        elif record:
            record.append(line)
    if record:
        yield timestamp, record


def is_reported(line):
    return any(f' - {level} - ' in line for level in REPORTED_LEVELS)


class PanLogger:
    def __init__(self, log_file='debug-log.txt', level='INFO'):
        self.log_file = log_file
        self.level = level

    def setup_logging(self):
        # Perform cleanup of old logs before setting up new logging configuration
        self.cleanup_old_logs()

        logger = logging.getLogger('')
        logger.setLevel(logging.DEBUG)

        handler = TimedRotatingFileHandler(self.log_file, utc=True, when="midnight", interval=1, backupCount=1)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.getLevelName(str(self.level).upper()))
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)
        return logger

    def mark_start_of_run_in_log(self):
        """ Append a run marker and return the offset where this run's output begins. """
        position = os.path.getsize(self.log_file) if os.path.exists(self.log_file) else 0

        with open(self.log_file, 'a') as file:
            file.write(RUN_MARKER.format(time.strftime(TIMESTAMP_FORMAT)) + '\n')
        return position

    def print_warnings_and_errors_from_log(self, start_position):
        """ Print this run's warnings and errors, tracebacks included, and return the printed lines. """
        if not os.path.exists(self.log_file):
            print("Log file not found.")
            return []

        with open(self.log_file, 'r') as file:
            file.seek(start_position)
            records = list(group_records(file))

        reported = [line.rstrip('\n') for _, record in records if is_reported(record[0]) for line in record]
        for line in reported:
            print(line)
        return reported

    def cleanup_old_logs(self, max_age=MAX_LOG_AGE):
        """ Drop records older than max_age seconds, keeping each record's continuation lines with it. """
        if not os.path.exists(self.log_file):
            return

        with open(self.log_file, 'r') as file:
            records = list(group_records(file))

        cutoff = time.time() - max_age
        with open(self.log_file, 'w') as file:
            for timestamp, record in records:
                if timestamp > cutoff:
                    file.writelines(record)
