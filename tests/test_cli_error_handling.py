"""Tests for CLI error handling helpers."""

import logging

import click
import pytest

from duetrack.cli.error_handling import handle_domain_error
from duetrack.domain.errors import RecordFormatError


def test_handle_domain_error_exits_with_message(capsys, caplog):
    ctx = click.Context(click.Command("summary"), info_name="summary")
    caplog.set_level(logging.DEBUG, logger="duetrack.cli.error_handling")

    with pytest.raises(click.exceptions.Exit) as exc_info:
        handle_domain_error(ctx, RecordFormatError("Record 3: invalid 'label': expected text"))

    assert exc_info.value.exit_code == 1
    assert capsys.readouterr().err == "Error: Record 3: invalid 'label': expected text\n"
    assert "RecordFormatError in 'summary'" in caplog.text
