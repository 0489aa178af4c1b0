from httop.models import Event
from httop.parser import parse_line
from httop.store import AggregateStore, Snapshot

__all__ = ["AggregateStore", "Event", "Snapshot", "parse_line"]
