from src.branch_timeclock.branch_timeclock.database.bootstrap import iter_sql_statements


def test_splits_statements_and_keeps_quoted_semicolons():
    sql = "CREATE TABLE a (x INT);\nINSERT INTO a VALUES ('x;y');\n  "
    assert list(iter_sql_statements(sql)) == ["CREATE TABLE a (x INT)", "INSERT INTO a VALUES ('x;y')"]


def test_trailing_statement_without_semicolon():
    assert list(iter_sql_statements("SELECT 1")) == ["SELECT 1"]
