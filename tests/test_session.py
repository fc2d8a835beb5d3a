"""Unit tests for session options: the option set, reader, applier and presets."""

from __future__ import annotations

import pytest

from planproof.engine.sqlserver import USER_OPTIONS_COMMAND, SqlServerEngine
from planproof.schema.session_options import SessionOptionSet
from planproof.session.applier import apply_session_statements
from planproof.session.settings import (
    SQLSERVER_REQUIRED_OPTIONS,
    SQLSERVER_SESSION_STATEMENTS,
    missing_session_statements,
)
from tests.fixtures import DRIVER_DEFAULT_USER_OPTIONS, INDEXED_VIEW_USER_OPTIONS
from tests.fixtures.fake_db import FakeDriverError

# ---------------------------------------------------------------------------
# SessionOptionSet
# ---------------------------------------------------------------------------


def test_lookup_is_case_insensitive():
    options = SessionOptionSet([("ARITHABORT", "ON")])
    assert options["arithabort"] == "ON"
    assert "ArithAbort" in options


def test_value_comparison_is_case_insensitive():
    options = SessionOptionSet([("ARITHABORT", "ON")])
    assert options.value_equals("arithabort", "on")


def test_value_equals_is_false_for_missing_name():
    options = SessionOptionSet([("ansi_nulls", "ON")])
    assert not options.value_equals("arithabort", "ON")


def test_missing_name_is_distinct_from_other_value():
    options = SessionOptionSet([("arithabort", "OFF")])
    assert "arithabort" in options
    assert not options.value_equals("arithabort", "ON")
    assert "quoted_identifier" not in options
    assert options.get("quoted_identifier") is None


def test_reported_case_is_preserved():
    options = SessionOptionSet([("isolation level", "read committed"), ("ARITHABORT", "ON")])
    assert list(options) == ["isolation level", "ARITHABORT"]


def test_later_duplicate_wins():
    options = SessionOptionSet([("arithabort", "OFF"), ("ARITHABORT", "ON")])
    assert len(options) == 1
    assert dict(options.items()) == {"ARITHABORT": "ON"}


def test_non_string_key_is_not_contained():
    assert 1 not in SessionOptionSet([("textsize", "1")])


# ---------------------------------------------------------------------------
# Reader (SqlServerEngine.read_session_options)
# ---------------------------------------------------------------------------


def test_reader_issues_useroptions_command(make_connection):
    conn = make_connection()
    SqlServerEngine().read_session_options(conn)
    assert conn.statements == [USER_OPTIONS_COMMAND]
    assert all(c.closed for c in conn.cursors)


def test_reader_normalizes_set_to_on(make_connection):
    options = SqlServerEngine().read_session_options(make_connection())
    assert options["arithabort"] == "ON"
    assert options["ANSI_NULLS"] == "ON"


def test_reader_passes_other_values_through(make_connection):
    options = SqlServerEngine().read_session_options(make_connection())
    assert options["isolation level"] == "read committed"
    assert options["textsize"] == "2147483647"
    assert len(options) == len(INDEXED_VIEW_USER_OPTIONS)


def test_reader_trims_values(make_connection):
    conn = make_connection(user_options=[("language ", " us_english  "), ("arithabort", " set ")])
    options = SqlServerEngine().read_session_options(conn)
    assert options["language"] == "us_english"
    assert options["arithabort"] == "ON"


def test_reader_propagates_driver_errors(make_connection):
    conn = make_connection(fail_on="DBCC")
    with pytest.raises(FakeDriverError):
        SqlServerEngine().read_session_options(conn)
    assert conn.cursors[0].closed


# ---------------------------------------------------------------------------
# Applier
# ---------------------------------------------------------------------------


def test_applier_runs_statements_in_order_one_roundtrip_each(make_connection):
    conn = make_connection()
    count = apply_session_statements(conn, ["SET ARITHABORT ON", "SET ANSI_NULLS ON"])
    assert count == 2
    assert conn.statements == ["SET ARITHABORT ON", "SET ANSI_NULLS ON"]
    assert len(conn.cursors) == 2
    assert all(c.closed for c in conn.cursors)


def test_applier_later_statement_overrides_earlier(make_connection):
    conn = make_connection(user_options=DRIVER_DEFAULT_USER_OPTIONS)
    apply_session_statements(conn, ["SET ARITHABORT ON", "SET ARITHABORT OFF"])
    assert "arithabort" not in SqlServerEngine().read_session_options(conn)


def test_applier_stops_at_first_failure(make_connection):
    conn = make_connection(fail_on="QUOTED_IDENTIFIER")
    statements = ["SET ARITHABORT ON", "SET QUOTED_IDENTIFIER ON", "SET ANSI_NULLS ON"]
    with pytest.raises(FakeDriverError):
        apply_session_statements(conn, statements)
    assert conn.statements == statements[:2]


def test_applier_with_no_statements_sends_nothing(make_connection):
    conn = make_connection()
    assert apply_session_statements(conn, []) == 0
    assert conn.executed == []


# ---------------------------------------------------------------------------
# SQL Server presets
# ---------------------------------------------------------------------------


def test_preset_statements_satisfy_required_options(make_connection):
    conn = make_connection(user_options=DRIVER_DEFAULT_USER_OPTIONS)
    apply_session_statements(conn, SQLSERVER_SESSION_STATEMENTS)
    options = SqlServerEngine().read_session_options(conn)
    for name, value in SQLSERVER_REQUIRED_OPTIONS.items():
        assert options.value_equals(name, value), name
    assert "numeric_roundabort" not in options


def test_missing_statements_for_driver_default_session():
    options = SessionOptionSet(
        (name, "ON" if value == "SET" else value) for name, value in DRIVER_DEFAULT_USER_OPTIONS
    )
    assert missing_session_statements(options) == ["SET ARITHABORT ON"]


def test_missing_statements_empty_when_session_matches():
    options = SessionOptionSet(
        (name, "ON" if value == "SET" else value) for name, value in INDEXED_VIEW_USER_OPTIONS
    )
    assert missing_session_statements(options) == []


def test_missing_statements_turns_off_unwanted_option():
    options = SessionOptionSet([("numeric_roundabort", "ON")])
    statements = missing_session_statements(options, {"NUMERIC_ROUNDABORT": "OFF"})
    assert statements == ["SET NUMERIC_ROUNDABORT OFF"]
