""" Server side of the request/response pattern. An :class:`RpcServer`
    maps the RPC methods of the local entity to handler functions, invokes
    the matching handler for every inbound request, and sends back the
    response.
"""

import concurrent.futures
import logging
import threading

from .. import config
from .. import uuid
from ..protocol.builder import UAttributesBuilder
from ..protocol.message import UMessageType, UPayload
from ..protocol.status import UCode, UStatus, UStatusError
from ..uri import validator as uri_validator
from ..uri.model import ANY


logger = logging.getLogger(__name__)


class RpcServer:
    """ Serve RPC methods of the entity identified by ``transport.get_source()``.

        A handler is a callable that accepts the request :class:`UMessage`
        and returns the response :class:`UPayload`, or None for an empty
        response. A handler may raise :class:`UStatusError` to report a
        failure to the caller; any other exception is reported as INTERNAL.
        Handlers are invoked on a pool of worker threads.
    """

    def __init__(self, transport, id_generator=None, workers=None):
        if workers is None:
            workers = config.rpc_workers

        self.transport = transport
        self.ids = id_generator if id_generator is not None else uuid.factory

        self.handlers = dict()
        self.lock = threading.Lock()
        self.workers = concurrent.futures.ThreadPoolExecutor(max_workers=workers)


    def _check_method(self, method):
        """ Return a failed :class:`UStatus` if *method* cannot be served
            through this server's transport, otherwise None.
        """

        source = self.transport.get_source()

        if method is None or \
           method.authority != source.authority or \
           method.entity.id != source.entity.id or \
           method.entity.version_major != source.entity.version_major:

            return UStatus(UCode.INVALID_ARGUMENT, 'Method URI does not match the transport source URI')

        result = uri_validator.validate_rpc_method(method)
        if result.is_failure():
            return result.to_status()

        return None


    def register_request_handler(self, method, handler):
        """ Route requests for *method* to *handler*. """

        failure = self._check_method(method)
        if failure is not None:
            return failure

        with self.lock:
            if method in self.handlers:
                return UStatus(UCode.ALREADY_EXISTS, 'Handler already registered')

            status = self.transport.register_listener(ANY, method, self._handle_request)
            if status.is_failure():
                logger.warning('cannot register handler for %s: %s', method, status.message)
                return status

            self.handlers[method] = handler

        return status


    def unregister_request_handler(self, method, handler):
        """ Stop routing requests for *method* to *handler*. """

        failure = self._check_method(method)
        if failure is not None:
            return failure

        with self.lock:
            if method not in self.handlers or self.handlers[method] != handler:
                return UStatus(UCode.NOT_FOUND, 'Handler not found')

            del self.handlers[method]

        # The transport waits for in-flight deliveries to finish, and those
        # deliveries acquire self.lock; it must not be held here.

        return self.transport.unregister_listener(ANY, method, self._handle_request)


    def _handle_request(self, message):
        attributes = message.attributes

        if attributes.type != UMessageType.REQUEST:
            return

        with self.lock:
            handler = self.handlers.get(attributes.sink)

        if handler is None:
            # Another server on this transport may own the method.
            return

        try:
            self.workers.submit(self._dispatch, handler, message)
        except RuntimeError:
            logger.warning('server shut down, dropping request %s', attributes.id)


    def _dispatch(self, handler, request):
        builder = UAttributesBuilder.response_for(request.attributes, id_generator=self.ids)
        payload = UPayload.EMPTY

        try:
            result = handler(request)
        except UStatusError as exc:
            logger.debug('handler for %s failed: %s', request.attributes.sink, exc)
            builder.with_commstatus(exc.code)
        except Exception:
            logger.exception('handler for %s raised an exception', request.attributes.sink)
            builder.with_commstatus(UCode.INTERNAL)
        else:
            if result is not None:
                payload = result

        status = self.transport.send(builder.message(payload))
        if status.is_failure():
            logger.warning('response to %s not sent: %s', request.attributes.id, status.message)

        return status


    def close(self):
        """ Unregister every handler and stop the worker threads. """

        with self.lock:
            methods = tuple(self.handlers.keys())
            self.handlers.clear()

        for method in methods:
            self.transport.unregister_listener(ANY, method, self._handle_request)

        self.workers.shutdown(wait=False)


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.close()

# end of class RpcServer


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
