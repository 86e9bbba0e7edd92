"""
Extended DisMax query builder.

Accumulates Solr select parameters in call order. Parameters are kept as
an ordered list of pairs because Solr accepts repeated names (``fq``) and
the order is preserved on the wire.

Dependencies: None
System role: Rendering of search requests into Solr's query protocol
"""

from enum import Enum
from typing import Iterable

Query = list[tuple[str, str]]


class Operator(str, Enum):
    """Default boolean operator between query terms (``q.op``)."""

    AND = "AND"
    OR = "OR"


def _flag(value: bool) -> str:
    return "true" if value else "false"


class EDisMaxQueryBuilder:
    """
    Chainable accumulator of ``edismax`` parameters.

    Every setter returns the builder. Setters taking text skip empty values,
    so optional axes can be passed through unconditionally. ``build`` is
    terminal: the builder cannot be used afterwards.

    Usage:
        params = (
            EDisMaxQueryBuilder()
            .q(sanitize(keyword))
            .rows(20)
            .start(0)
            .build()
        )
    """

    def __init__(self) -> None:
        self._params: Query | None = [("defType", "edismax")]

    def _pending(self) -> Query:
        if self._params is None:
            raise RuntimeError("query builder already consumed by build()")
        return self._params

    def _push(self, name: str, value: object) -> "EDisMaxQueryBuilder":
        self._pending().append((name, str(value)))
        return self

    def _push_text(self, name: str, value: object) -> "EDisMaxQueryBuilder":
        params = self._pending()
        text = "" if value is None else str(value)
        if text:
            params.append((name, text))
        return self

    def build(self) -> Query:
        """Return the accumulated parameters and consume the builder."""
        params = self._pending()
        self._params = None
        return params

    # Common parameters

    def sort(self, sort: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("sort", sort)

    def start(self, start: int) -> "EDisMaxQueryBuilder":
        return self._push("start", start)

    def rows(self, rows: int) -> "EDisMaxQueryBuilder":
        return self._push("rows", rows)

    def fq(self, fq: str | Iterable[str] | None) -> "EDisMaxQueryBuilder":
        """Add one filter clause, or one ``fq`` pair per clause of an iterable."""
        if fq is None or isinstance(fq, str):
            return self._push_text("fq", fq)
        for clause in fq:
            self._push_text("fq", clause)
        return self

    def fl(self, fl: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("fl", fl)

    def debug(self) -> "EDisMaxQueryBuilder":
        self._push("debug", "all")
        return self._push("debug.explain.structured", "true")

    def wt(self, wt: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("wt", wt)

    def facet(self, facet: str | None) -> "EDisMaxQueryBuilder":
        """Attach a serialized JSON Facet API request."""
        return self._push_text("json.facet", facet)

    # DisMax parameters

    def op(self, op: Operator) -> "EDisMaxQueryBuilder":
        return self._push("q.op", Operator(op).value)

    def df(self, df: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("df", df)

    def q(self, q: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("q", q)

    def q_alt(self, q: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("q.alt", q)

    def qf(self, qf: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("qf", qf)

    def qs(self, qs: int) -> "EDisMaxQueryBuilder":
        return self._push("qs", qs)

    def pf(self, pf: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("pf", pf)

    def ps(self, ps: int) -> "EDisMaxQueryBuilder":
        return self._push("ps", ps)

    def mm(self, mm: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("mm", mm)

    def tie(self, tie: float) -> "EDisMaxQueryBuilder":
        return self._push("tie", tie)

    def bq(self, bq: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("bq", bq)

    def bf(self, bf: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("bf", bf)

    # Extended DisMax parameters

    def sow(self, sow: bool) -> "EDisMaxQueryBuilder":
        return self._push("sow", _flag(sow))

    def boost(self, boost: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("boost", boost)

    def lowercase_operators(self, flag: bool) -> "EDisMaxQueryBuilder":
        return self._push("lowercaseOperators", _flag(flag))

    def pf2(self, pf: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("pf2", pf)

    def ps2(self, ps: int) -> "EDisMaxQueryBuilder":
        return self._push("ps2", ps)

    def pf3(self, pf: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("pf3", pf)

    def ps3(self, ps: int) -> "EDisMaxQueryBuilder":
        return self._push("ps3", ps)

    def stopwords(self, flag: bool) -> "EDisMaxQueryBuilder":
        return self._push("stopwords", _flag(flag))

    def uf(self, uf: str | None) -> "EDisMaxQueryBuilder":
        return self._push_text("uf", uf)


def to_sort(sort: str | None, default: str = "") -> str:
    """
    Translate a sort key into Solr ``sort`` syntax.

    A leading ``-`` selects descending order.

    Args:
        sort: Sort key such as ``difficulty`` or ``-start_at``
        default: Value used when no key is given

    Returns:
        str: ``"<field> asc"``, ``"<field> desc"`` or ``default``
    """
    if not sort:
        return default
    if sort.startswith("-"):
        return f"{sort[1:]} desc"
    return f"{sort} asc"


def paging(limit: int | None, page: int | None, default_rows: int = 20) -> tuple[int, int]:
    """
    Compute ``(rows, start)`` from a 1-based page.

    Returns:
        tuple: rows per page and offset of the first row
    """
    rows = limit or default_rows
    start = ((page or 1) - 1) * rows
    return rows, start
