""" Client side of the request/response pattern. An :class:`RpcClient`
    sends request messages through a transport, and correlates the response
    messages it receives with the requests that prompted them.

    Each request is tracked by an :class:`Invocation` from the moment before
    it is sent until it reaches a terminal state: resolved by a response,
    failed by the transport or by the remote side, or timed out.
"""

import concurrent.futures
import logging
import threading

from .. import uuid
from ..protocol.builder import UAttributesBuilder
from ..protocol.message import UMessage, UMessageType, UPayload
from ..protocol.status import UCode, UStatus, UStatusError
from ..protocol.validator import get_validator
from ..uri.model import ANY, UResource
from .options import CallOptions


logger = logging.getLogger(__name__)


class Invocation:
    """ The result slot for one RPC call. The caller can block on
        :func:`result`, or register a continuation with
        :func:`add_done_callback`; either way the outcome is a
        :class:`UPayload` or a :class:`UStatusError`.

        The underlying :class:`concurrent.futures.Future` is available as
        the *future* attribute, for use with :func:`asyncio.wrap_future`.
        Cancelling that future directly releases the invocation just as
        :func:`cancel` does, except that the outcome is a
        :class:`concurrent.futures.CancelledError`.
    """

    def __init__(self, client, id, timeout):
        self.client = client
        self.id = id
        self.timeout = timeout
        self.future = concurrent.futures.Future()
        self.timer = None

        self.future.add_done_callback(self._cancelled)


    def _cancelled(self, future):
        if not future.cancelled():
            return

        self._stop_timer()
        if self.client is not None:
            self.client._forget(self)


    @classmethod
    def failed(cls, client, id, status):
        invocation = cls(client, id, None)
        invocation._fail(status)
        return invocation


    def result(self, timeout=None):
        """ Wait for, and return, the response payload. *timeout* is how
            long, in seconds, to wait locally; it is independent of the
            deadline of the request itself.
        """

        return self.future.result(timeout)


    def exception(self, timeout=None):
        return self.future.exception(timeout)


    def done(self):
        return self.future.done()


    def add_done_callback(self, function):
        """ Invoke *function* with this :class:`Invocation` as its sole
            argument once the invocation reaches a terminal state.
        """

        self.future.add_done_callback(lambda future: function(self))


    def cancel(self):
        """ Give up waiting for a response. The invocation fails with
            DEADLINE_EXCEEDED, and any response arriving later is dropped.
        """

        if self.client is not None:
            self.client._forget(self)

        return self._fail(UStatus(UCode.DEADLINE_EXCEEDED, 'Request cancelled'))


    def _start_timer(self, expire):
        if self.future.done():
            return

        self.timer = threading.Timer(self.timeout / 1000.0, expire, args=(self,))
        self.timer.daemon = True
        self.timer.start()


    def _stop_timer(self):
        timer = self.timer
        if timer is not None:
            timer.cancel()


    def _complete(self, payload):
        self._stop_timer()

        try:
            self.future.set_result(payload)
        except concurrent.futures.InvalidStateError:
            return False

        return True


    def _fail(self, status):
        self._stop_timer()

        try:
            self.future.set_exception(UStatusError(status))
        except concurrent.futures.InvalidStateError:
            return False

        return True

# end of class Invocation



class RpcClient:
    """ Invoke RPC methods via *transport*. A single listener is registered
        with the transport for the lifetime of the client; it receives every
        response addressed to this client.

        The *id_generator* mints request ids; it must provide a
        ``new_id()`` method, and defaults to :data:`uprotocol.uuid.factory`.
    """

    def __init__(self, transport, id_generator=None):
        self.transport = transport
        self.ids = id_generator if id_generator is not None else uuid.factory

        self.source = transport.get_source().replace(resource=UResource.for_rpc_response())

        self.pending = dict()
        self.pending_lock = threading.Lock()

        status = transport.register_listener(ANY, self.source, self._handle_response)
        if status.is_failure():
            logger.warning('cannot register response listener: %s', status.message)
            raise UStatusError(status)


    def invoke_method(self, method, payload=None, options=None):
        """ Send a request to *method*, the address of an RPC method, with
            the supplied *payload* and :class:`CallOptions`. Returns an
            :class:`Invocation`; failures are reported through it, never
            raised.
        """

        if payload is None:
            payload = UPayload.EMPTY
        if options is None:
            options = CallOptions()

        try:
            id = self.ids.new_id()
            builder = UAttributesBuilder.request(self.source, method, options.priority, options.timeout)
            attributes = builder.with_id(id).with_token(options.token).build()
        except Exception as exc:
            logger.exception('cannot build request for %s', method)
            return Invocation.failed(self, None, UStatus(UCode.UNKNOWN, str(exc)))

        result = get_validator(attributes).validate(attributes)
        if result.is_failure():
            return Invocation.failed(self, id, result.to_status())

        invocation = Invocation(self, id, options.timeout)

        # The entry must exist before the request is sent; the response
        # can arrive before send() returns.

        with self.pending_lock:
            if id in self.pending:
                invocation._fail(UStatus(UCode.ALREADY_EXISTS, 'Duplicated request found'))
                return invocation

            self.pending[id] = invocation

        try:
            status = self.transport.send(UMessage(attributes, payload))
        except Exception as exc:
            logger.exception('transport failed sending request %s', id)
            status = UStatus(UCode.UNKNOWN, str(exc))

        if status.is_failure():
            logger.warning('request %s not sent: %s', id, status.message)
            self._forget(invocation)
            invocation._fail(status)
            return invocation

        invocation._start_timer(self._expire)
        return invocation


    def call(self, method, payload=None, options=None):
        """ Blocking equivalent of :func:`invoke_method`: return the response
            :class:`UPayload`, or raise :class:`UStatusError`.
        """

        return self.invoke_method(method, payload, options).result()


    def _forget(self, invocation):
        with self.pending_lock:
            if self.pending.get(invocation.id) is invocation:
                del self.pending[invocation.id]


    def _expire(self, invocation):
        self._forget(invocation)
        if invocation._fail(UStatus(UCode.DEADLINE_EXCEEDED, 'Request timed out')):
            logger.debug('request %s timed out', invocation.id)


    def _handle_response(self, message):
        attributes = message.attributes

        if attributes.type != UMessageType.RESPONSE:
            return

        with self.pending_lock:
            invocation = self.pending.pop(attributes.reqid, None)

        if invocation is None:
            logger.debug('dropping response %s to unknown request %s', attributes.id, attributes.reqid)
            return

        try:
            commstatus = attributes.commstatus
            if commstatus is not None and commstatus != UCode.OK:
                code = UCode(commstatus)
                invocation._fail(UStatus(code, 'Communication error [%s]' % (code.name,)))
            else:
                invocation._complete(message.payload)
        except Exception as exc:
            logger.exception('cannot resolve request %s', attributes.reqid)
            invocation._fail(UStatus(UCode.UNKNOWN, str(exc)))


    def close(self):
        """ Stop listening for responses, and fail every invocation still
            waiting for one with ABORTED.
        """

        self.transport.unregister_listener(ANY, self.source, self._handle_response)

        with self.pending_lock:
            pending = tuple(self.pending.values())
            self.pending.clear()

        for invocation in pending:
            invocation._fail(UStatus(UCode.ABORTED, 'Client closed'))


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.close()

# end of class RpcClient


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
