from .event_stream import EventStream, Subscription

__all__ = ["EventStream", "Subscription"]
