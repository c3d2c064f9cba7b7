import inspect

import zope.interface


class IEvent(zope.interface.Interface):
    obj = zope.interface.Attribute("The host object")


# noinspection PyMethodParameters
class IEventResponder(zope.interface.Interface):
    def respond_to_event(event):
        """Respond to the passed event."""


# noinspection PyMethodParameters
class IEventHost(zope.interface.Interface):
    def trigger_event(event, *a, **kw):
        """Trigger an event with optional parameters."""


@zope.interface.implementer(IEvent)
class Event(object):
    obj = None
    originator = None

    def __init__(self, obj=None, originator=None, **kw):
        """
        :param obj: The object that hosts the event, if any.
        :param originator: The object/whatever that caused the event.
        :param kw: Any additional attributes to set on the event.
        """
        if obj is not None:
            self.obj = obj
        if originator is not None:
            self.originator = originator
        self.__dict__.update(kw)


class NewResult(Event):
    """
    A roller has a new result, either rolled or restored from a snapshot.

    :ivar result: The numeric result.
    :ivar tooltip: The roll breakdown.
    :ivar restored: True if the result came from apply_result().
    """
    result = None
    tooltip = ''
    restored = False


def event_handler(types):
    """
    Decorator to identify a member of an EventResponder as an event handler.

    :param types: The event type to handle.
    :type types: type
    """
    types = types if isinstance(types, tuple) else (types,)

    def decorate(f):
        f.handles_event_types = types
        return f
    return decorate


@zope.interface.implementer(IEventResponder)
class EventResponder(object):
    """
    Base class for objects that wish to be event responders.
    """
    __slots__ = ()

    event_handler_cache = {}

    def respond_to_event(self, event):
        for handler in self._event_handlers(event):
            handler(self, event)

    @classmethod
    def _event_handlers(cls, event):
        etype = type(event)
        if cls not in EventResponder.event_handler_cache:
            EventResponder.event_handler_cache[cls] = {}
        if etype not in EventResponder.event_handler_cache[cls]:
            def is_handler(m):
                if inspect.isfunction(m):
                    for t in getattr(m, 'handles_event_types', ()):
                        if isinstance(event, t):
                            return True
                return False
            handlers = [m[1] for m in
                        inspect.getmembers(cls, predicate=is_handler)]
            EventResponder.event_handler_cache[cls][etype] = handlers
        return EventResponder.event_handler_cache[cls][etype]


@zope.interface.implementer(IEventHost)
class HasEvents(object):
    """
    An object that can notify other objects of arbitrary events.
    """
    def _spawn_event(self, event, *a, **kw):
        """
        Spawn (if necessary) an event object based on the passed event or event
        class. Also sets event.obj if it's an Event subclass.

        :param event: The event to trigger, or the event class to instantiate.
        :param a: Position arguments to pass to event instantiation.
        :param kw: Keyword arguments to pass to event instantiation.

        :return: The instantiated event, or the event that was passed in.
        """
        if inspect.isclass(event):
            event = event(*a, **kw)
        if IEvent.providedBy(event) and event.obj is None:
            event.obj = self
        return event

    def trigger_event(self, event, *a, **kw):
        """
        Trigger an event to be propagated to all responders.

        :return: The event.
        """
        event = self._spawn_event(event, *a, **kw)
        for r in self.event_responders(event):
            if IEventResponder.providedBy(r):
                r.respond_to_event(event)
            elif callable(r):
                r(event)
        return event

    def event_responders(self, event):
        """:rtype: list"""
        return []


class HasSubscribableEvents(HasEvents):
    """
    An object with events that keeps a registration of other objects or
    callbacks that wish to receive them.
    """
    _event_subscriptions = None

    def subscribe_to_event(self, event_type, responder):
        """
        Register a responder or callback to receive events of a given type.

        :param event_type: The event type(s) to register for.
        :type event_type: type or tuple
        :param responder: An IEventResponder provider, or a callable taking
            the event.
        """
        if self._event_subscriptions is None:
            self._event_subscriptions = {}
        event_types = (event_type if isinstance(event_type, (tuple, list))
                       else (event_type,))
        for et in event_types:
            self._event_subscriptions.setdefault(et, []).append(responder)

    def unsubscribe_from_event(self, event_type, responder):
        subs = (self._event_subscriptions or {}).get(event_type, [])
        if responder in subs:
            subs.remove(responder)

    def event_responders(self, event):
        r = super(HasSubscribableEvents, self).event_responders(event)
        for et, responders in (self._event_subscriptions or {}).items():
            if isinstance(event, et):
                r.extend(responders)
        return r
