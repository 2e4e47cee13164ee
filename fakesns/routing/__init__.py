"""fakesns delivery routing: hands rendered notifications to subscribers.

Delivery adapters are pluggable per target kind: queue subscriptions go to
the in-process queue store, HTTP subscriptions are POSTed with httpx.  The
DeliveryDispatcher picks the adapter for each subscription and contains
every delivery failure so that one bad subscriber never fails a drain.
"""
