from src.teacher_timesheet.teacher_timesheet.database.bootstrap import default_schema_path, split_sql_statements


def test_schema_file_splits_into_create_table_statements():
    statements = split_sql_statements(default_schema_path().read_text(encoding="utf-8"))

    assert len(statements) == 3
    assert all(s.upper().startswith("CREATE TABLE") for s in statements)
    assert "uq_time_entries_open_session" in statements[1]


def test_splitter_ignores_semicolons_in_quotes_and_comments():
    sql = """
    CREATE DATABASE foo;
    USE foo;
    -- a comment; with a semicolon
    INSERT INTO t VALUES ('a;b');
    INSERT INTO t VALUES ("c;d")
    """

    assert split_sql_statements(sql) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
    ]
