from __future__ import annotations

from httop.models import DecreaseLimitCommand, IncreaseLimitCommand, NoopCommand, QuitCommand, SortCommand, SortKey
from httop.store import AggregateStore, Snapshot
from httop.view import Row, ViewState, build_rows, sort_rows, top_status_codes, visible_rows

from conftest import make_event


def _row(count: int, path: str, *, ip: str = "1.1.1.1", status: int = 200, ua: str = "ua") -> Row:
    return Row(path=path, count=count, ip=ip, status=status, user_agent=ua)


def test_count_sort_is_stable() -> None:
    rows = [_row(5, "/a"), _row(1, "/b"), _row(5, "/c")]
    assert [r.path for r in sort_rows(rows, SortKey.COUNT)] == ["/a", "/c", "/b"]


def test_sort_keys() -> None:
    rows = [
        _row(1, "/b", ip="10.0.0.2", status=500, ua="zeta"),
        _row(3, "/a", ip="10.0.0.3", status=200, ua="alpha"),
        _row(2, "/c", ip="10.0.0.1", status=404, ua="mid"),
    ]
    assert [r.path for r in sort_rows(rows, SortKey.PATH)] == ["/a", "/b", "/c"]
    assert [r.status for r in sort_rows(rows, SortKey.STATUS)] == [200, 404, 500]
    assert [r.ip for r in sort_rows(rows, SortKey.IP)] == ["10.0.0.1", "10.0.0.2", "10.0.0.3"]
    assert [r.user_agent for r in sort_rows(rows, SortKey.USER_AGENT)] == ["alpha", "mid", "zeta"]
    assert [r.count for r in sort_rows(rows, SortKey.COUNT)] == [3, 2, 1]


def test_limit_steps_and_floor() -> None:
    view = ViewState()
    assert view.display_limit == 20
    for _ in range(3):
        view.apply(IncreaseLimitCommand())
    assert view.display_limit == 35
    for _ in range(10):
        view.apply(DecreaseLimitCommand())
    assert view.display_limit == 5


def test_apply_sort_and_noop() -> None:
    view = ViewState()
    view.apply(SortCommand(key=SortKey.PATH))
    assert view.sort_key is SortKey.PATH
    view.apply(NoopCommand())
    view.apply(QuitCommand())
    assert view.sort_key is SortKey.PATH
    assert view.display_limit == 20


def test_build_rows_uses_first_retained_sample() -> None:
    store = AggregateStore()
    store.record(make_event("/a", 200, ip="1.1.1.1", ua="first"))
    store.record(make_event("/a", 500, ip="2.2.2.2", ua="second"))
    store.record(make_event("/b", 404, ip="3.3.3.3"))

    rows = build_rows(store.snapshot())
    assert rows == [
        Row(path="/a", count=2, ip="1.1.1.1", status=200, user_agent="first"),
        Row(path="/b", count=1, ip="3.3.3.3", status=404, user_agent="curl/8.0"),
    ]


def test_paths_without_retained_sample_are_omitted() -> None:
    store = AggregateStore(recent_max=2)
    store.record(make_event("/old"))
    store.record(make_event("/new"))
    store.record(make_event("/new"))

    snap = store.snapshot()
    assert snap.paths == {"/old": 1, "/new": 2}
    assert [r.path for r in build_rows(snap)] == ["/new"]


def test_visible_rows_truncates_to_limit() -> None:
    store = AggregateStore()
    for i in range(12):
        store.record(make_event(f"/p{i:02d}"))
    view = ViewState(sort_key=SortKey.PATH, display_limit=5)
    assert [r.path for r in visible_rows(store.snapshot(), view)] == ["/p00", "/p01", "/p02", "/p03", "/p04"]


def test_top_status_codes() -> None:
    snap = Snapshot(status_codes={200: 3, 301: 1, 404: 5, 500: 1, 502: 2, 503: 4})
    assert top_status_codes(snap) == [(404, 5), (503, 4), (200, 3), (502, 2), (301, 1)]
