from eventwire._internal.subscriber import EventSubscriber

__all__ = ["EventSubscriber"]
