"""
Tests for log file housekeeping.
"""

import time

import pytest

from log_module import TIMESTAMP_FORMAT, PanLogger, group_records


def stamp(seconds_ago=0):
    return time.strftime(TIMESTAMP_FORMAT, time.localtime(time.time() - seconds_ago))


def log_line(level, message, seconds_ago=0):
    return f"{stamp(seconds_ago)},123 - {level} - {message}\n"


TRACEBACK = [
    "Traceback (most recent call last):\n",
    '  File "main.py", line 1, in main\n',
    "RuntimeError: boom\n",
]


@pytest.fixture
def pan_logger(tmp_path):
    return PanLogger(str(tmp_path / 'debug-log.txt'))


def test_mark_start_of_run(pan_logger, tmp_path):
    assert pan_logger.mark_start_of_run_in_log() == 0
    first_run = (tmp_path / 'debug-log.txt').read_text()
    assert first_run.startswith(f"===== Run start: {stamp()[:10]}")

    assert pan_logger.mark_start_of_run_in_log() == len(first_run)


def test_group_records_keeps_tracebacks():
    error, info = log_line('ERROR', 'failed'), log_line('INFO', 'next')

    records = [record for _, record in group_records(["orphan line\n", error] + TRACEBACK + [info])]

    assert records == [[error] + TRACEBACK, [info]]


def test_print_warnings_and_errors_from_this_run(pan_logger, tmp_path, capsys):
    log_path = tmp_path / 'debug-log.txt'
    log_path.write_text(log_line('ERROR', 'previous run'))

    start_position = pan_logger.mark_start_of_run_in_log()
    with open(log_path, 'a') as file:
        file.write(log_line('INFO', 'Executing operational command'))
        file.write(log_line('ERROR', 'An error occurred: boom'))
        file.writelines(TRACEBACK)
        file.write(log_line('WARNING', 'Request returned status error'))

    reported = pan_logger.print_warnings_and_errors_from_log(start_position)

    output = capsys.readouterr().out
    assert 'previous run' not in output
    assert 'Executing operational command' not in output
    assert 'An error occurred: boom' in output
    assert 'RuntimeError: boom' in output
    assert len(reported) == 5


def test_print_without_log_file(pan_logger, capsys):
    assert pan_logger.print_warnings_and_errors_from_log(0) == []
    assert 'Log file not found.' in capsys.readouterr().out


def test_cleanup_old_logs_prunes_whole_records(pan_logger, tmp_path):
    two_days = 2 * 24 * 60 * 60
    old = [f"===== Run start: {stamp(two_days)} =====\n", log_line('ERROR', 'old failure', two_days)] + TRACEBACK
    recent = [f"===== Run start: {stamp(60)} =====\n", log_line('ERROR', 'new failure', 60)] + TRACEBACK
    log_path = tmp_path / 'debug-log.txt'
    log_path.write_text(''.join(old + recent))

    pan_logger.cleanup_old_logs()

    assert log_path.read_text() == ''.join(recent)


def test_cleanup_without_log_file(pan_logger, tmp_path):
    pan_logger.cleanup_old_logs()
    assert not (tmp_path / 'debug-log.txt').exists()
