""" Bookkeeping for listeners registered with a transport, and dispatch of
    inbound messages to them. Each matching listener is invoked on a worker
    thread, so that one slow listener cannot hold up delivery to another.
"""

import concurrent.futures
import logging
import threading

from .. import config
from ..protocol.status import UCode, UStatus
from ..uri.filter import UriFilter


logger = logging.getLogger(__name__)


class Registration:
    """ One listener, and the filter that selects messages for it. The
        registration tracks how many deliveries to the listener are in
        flight, and which threads are performing them.
    """

    def __init__(self, filter, listener):
        self.filter = filter
        self.listener = listener
        self.active = True
        self.inflight = 0
        self.threads = set()
        self.idle = threading.Condition()


    def begin(self):
        with self.idle:
            if not self.active:
                return False
            self.inflight += 1
            return True


    def deliver(self, message):
        thread = threading.get_ident()

        with self.idle:
            self.threads.add(thread)

        try:
            self.listener(message)
        except Exception:
            logger.exception('listener %r failed on message %s', self.listener, message.id)
        finally:
            with self.idle:
                self.threads.discard(thread)
                self.inflight -= 1
                self.idle.notify_all()


    def deactivate(self):
        """ Prevent any further deliveries, then wait for the deliveries
            already in flight to finish. A listener that unregisters itself
            from within a delivery does not wait on that delivery.
        """

        thread = threading.get_ident()

        with self.idle:
            self.active = False
            while self.inflight > 0:
                if thread in self.threads and self.inflight == 1:
                    break
                self.idle.wait()

# end of class Registration



class ListenerRegistry:
    """ The set of listeners for one transport. Messages passed to
        :func:`dispatch` are handed to every listener whose filter matches
        the message source and sink.
    """

    def __init__(self, workers=None):
        if workers is None:
            workers = config.dispatch_workers

        self.lock = threading.Lock()
        self.registrations = dict()
        self.workers = concurrent.futures.ThreadPoolExecutor(max_workers=workers)


    def register(self, source_filter, sink_filter, listener):
        key = (UriFilter(source_filter, sink_filter), listener)

        with self.lock:
            if key in self.registrations:
                return UStatus(UCode.ALREADY_EXISTS, 'Listener already registered')

            self.registrations[key] = Registration(key[0], listener)

        return UStatus.ok()


    def unregister(self, source_filter, sink_filter, listener):
        key = (UriFilter(source_filter, sink_filter), listener)

        with self.lock:
            registration = self.registrations.pop(key, None)

        if registration is None:
            return UStatus(UCode.NOT_FOUND, 'Listener not found')

        registration.deactivate()
        return UStatus.ok()


    def dispatch(self, message):
        """ Schedule delivery of *message* to every matching listener.
            Return the number of listeners it was scheduled for.
        """

        attributes = message.attributes

        with self.lock:
            registrations = tuple(self.registrations.values())

        count = 0
        for registration in registrations:
            if not registration.filter.matches(attributes.source, attributes.sink):
                continue
            if not registration.begin():
                continue

            try:
                self.workers.submit(registration.deliver, message)
            except RuntimeError:
                # The executor is shut down.
                with registration.idle:
                    registration.inflight -= 1
                    registration.idle.notify_all()
                continue

            count += 1

        return count


    def __len__(self):
        with self.lock:
            return len(self.registrations)


    def close(self):
        with self.lock:
            registrations = tuple(self.registrations.values())
            self.registrations.clear()

        for registration in registrations:
            registration.deactivate()

        self.workers.shutdown(wait=False)

# end of class ListenerRegistry


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
