"""Bulk reporting SQL.

Each response type reports through the same query shape: responses joined
to the type's answer table, filtered by questionnaire, completeness,
group membership and a single response or user. The result is a
``(sql, params)`` pair with ``?`` placeholders whose order matches the
parameter list exactly:

    questionnaire id(s), 'y' (completed only), group id, response or user id
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy.engine import RowMapping
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

_COLLECTIONS = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class BulkSQLConfig:
    """Describes a response type's answer table for bulk reporting.

    ``latest_alias`` is the alias of the answer table inside the
    latest-response-per-user subquery; ``latest_join_question`` adds the
    question table to that subquery.
    """

    table: str
    alias: str
    choice_record: bool
    response_record: bool
    rank_record: bool
    latest_alias: str
    latest_join_question: bool = False

    def extra_select(self) -> str:
        columns = [
            f"{self.alias}.choice_id AS choice_id" if self.choice_record else "0 AS choice_id",
            f"{self.alias}.response AS response" if self.response_record else "NULL AS response",
            f"{self.alias}.rankvalue AS rankvalue" if self.rank_record else "0 AS rankvalue",
        ]
        return ", ".join(columns)


def get_in_or_equal(items: Any) -> tuple[str, list[Any]]:
    """Return an ``= ?`` or ``IN (?, ...)`` fragment and its parameters."""
    if isinstance(items, _COLLECTIONS):
        values = list(items)
        if not values:
            raise ValueError("get_in_or_equal() needs at least one value")
        if len(values) == 1:
            return "= ?", values
        return f"IN ({', '.join('?' for _ in values)})", values
    return "= ?", [items]


def _select_clause(config: BulkSQLConfig) -> str:
    alias = config.alias
    return (
        f"SELECT qr.id || '_' || {alias}.question_id || '_' || {alias}.id AS id,\n"
        "       qr.submitted, qr.complete, qr.grade, qr.userid,\n"
        "       u.username, u.firstname, u.lastname,\n"
        f"       qr.id AS rid, {alias}.question_id,\n"
        f"       {config.extra_select()},\n"
        "       qro.response AS other"
    )


def _latest_response_join(config: BulkSQLConfig, completed_only: bool) -> str:
    latest = config.latest_alias
    lines = [
        "JOIN (",
        f"    SELECT {latest}.question_id, r.userid, MAX(r.submitted) AS submitted",
        "    FROM questionnaire_response r",
        f"    JOIN {config.table} {latest} ON r.id = {latest}.response_id",
    ]
    if config.latest_join_question:
        lines.append(f"    JOIN questionnaire_question q ON q.id = {latest}.question_id")
    if completed_only:
        lines.append("    WHERE r.complete = 'y'")
    lines += [
        f"    GROUP BY {latest}.question_id, r.userid",
        f") a ON a.question_id = {config.alias}.question_id AND a.submitted = qr.submitted AND a.userid = u.id",
    ]
    return "\n".join(lines)


def build_bulk_sql(
    config: BulkSQLConfig,
    questionnaireids: Any,
    responseid: int | None = None,
    userid: int | None = None,
    groupid: int | None = None,
    showincompletes: int = 0,
    unique_user_response: bool = False,
) -> tuple[str, list[Any]]:
    alias = config.alias
    qsql, params = get_in_or_equal(questionnaireids)

    join_conditions = [f"{alias}.response_id = qr.id", f"qr.questionnaireid {qsql}"]
    if showincompletes != 1:
        join_conditions.append("qr.complete = ?")
        params.append("y")

    clauses = [
        _select_clause(config),
        "FROM questionnaire_response qr",
        f"JOIN {config.table} {alias} ON " + " AND ".join(join_conditions),
        "LEFT JOIN questionnaire_response_other qro ON qro.response_id = qr.id",
        'LEFT JOIN "user" u ON u.id = qr.userid',
    ]

    if groupid and groupid > 0:
        clauses.append("INNER JOIN groups_members gm ON gm.groupid = ? AND gm.userid = qr.userid")
        params.append(groupid)

    # Viewing one user's own answers always shows every submission
    if unique_user_response and not userid:
        clauses.append(_latest_response_join(config, completed_only=showincompletes == 1))

    if responseid:
        clauses.append("WHERE qr.id = ?")
        params.append(responseid)
    elif userid:
        clauses.append("WHERE qr.userid = ?")
        params.append(userid)

    sql = "\n".join(clauses)
    logger.debug("Built bulk SQL for %s with %d params", config.table, len(params))
    return sql, params


def execute_bulk_sql(db: Session, sql: str, params: Sequence[Any]) -> list[RowMapping]:
    """Run a bulk ``(sql, params)`` pair on the session's connection."""
    connection = db.connection()
    if connection.dialect.paramstyle in ("format", "pyformat"):
        sql = sql.replace("%", "%%").replace("?", "%s")
    result = connection.exec_driver_sql(sql, tuple(params))
    return list(result.mappings().all())
