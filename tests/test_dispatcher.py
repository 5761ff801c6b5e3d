"""
Тесты отправки запросов и контракта callback(error, body, response)
"""

import asyncio
from contextlib import asynccontextmanager

import pytest
from pydantic import BaseModel

from conftest import FakeTransport, make_response
from watson_client.exceptions import MissingParamsError, RemoteError, TransportError
from watson_client.internal.request.descriptor import CallOptions, build_request
from watson_client.internal.request.dispatcher import (
    ResponseStream,
    create_request,
    parse_body,
    report_error,
)
from watson_client.internal.types.options import ServiceOptions


class Status(BaseModel):
    status: str


def make_descriptor(url="/v2/models/{model_id}", path=None, qs=None):
    options = ServiceOptions(url="https://watson.test/api", use_unauthenticated=True)
    call = CallOptions(method="GET", url=url, path=path or {"model_id": "m1"}, qs=qs or {})
    return build_request(options, call)


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, error, body, response):
        self.calls.append((error, body, response))
        return "done"


class TestParseBody:
    """Тесты разбора тела ответа"""

    def test_json(self):
        assert parse_body(make_response(200, {"a": 1})) == {"a": 1}

    def test_text(self):
        assert parse_body(make_response(200, "hola", "text/plain")) == "hola"

    def test_binary(self):
        assert parse_body(make_response(200, b"\x00\x01", "application/octet-stream")) == b"\x00\x01"

    def test_empty(self):
        assert parse_body(make_response(204, b"")) is None

    def test_broken_json_falls_back_to_text(self):
        assert parse_body(make_response(200, "{oops", "application/json")) == "{oops"


class TestCallbackMode:
    """Тесты вызова с callback"""

    @pytest.mark.asyncio
    async def test_success(self):
        transport = FakeTransport(make_response(200, {"status": "deleted"}))
        callback = Recorder()

        task = create_request(transport, make_descriptor(), callback, response_model=Status)
        assert isinstance(task, asyncio.Task)
        assert await task == "done"

        assert len(callback.calls) == 1
        error, body, response = callback.calls[0]
        assert error is None
        assert body == Status(status="deleted")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_model_mismatch_returns_plain_body(self):
        transport = FakeTransport(make_response(200, {"other": 1}))
        callback = Recorder()

        await create_request(transport, make_descriptor(), callback, response_model=Status)

        assert callback.calls[0][1] == {"other": 1}

    @pytest.mark.asyncio
    async def test_remote_error(self):
        transport = FakeTransport(make_response(404, {"error": "Model not found", "code": 404}))
        callback = Recorder()

        await create_request(transport, make_descriptor(), callback)

        error, body, response = callback.calls[0]
        assert isinstance(error, RemoteError)
        assert error.code == 404
        assert error.message == "Model not found"
        assert error.response_data == {"error": "Model not found", "code": 404}
        assert body is None
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_unauthorized(self):
        transport = FakeTransport(make_response(401, "Not Authorized", "text/html"))
        callback = Recorder()

        await create_request(transport, make_descriptor(), callback)

        error = callback.calls[0][0]
        assert error.status_code == 401
        assert error.message == "Unauthorized: Access is denied due to invalid credentials"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        failure = TransportError("Connection refused", path="/v2/models/m1")
        transport = FakeTransport(error=failure)
        callback = Recorder()

        await create_request(transport, make_descriptor(), callback)

        assert callback.calls == [(failure, None, None)]

    @pytest.mark.asyncio
    async def test_unexpected_transport_failure_wrapped(self):
        transport = FakeTransport(error=RuntimeError("boom"))
        callback = Recorder()

        await create_request(transport, make_descriptor(), callback)

        error, body, response = callback.calls[0]
        assert isinstance(error, TransportError)
        assert isinstance(error.__cause__, RuntimeError)
        assert len(callback.calls) == 1

    @pytest.mark.asyncio
    async def test_callback_not_callable(self):
        with pytest.raises(TypeError):
            create_request(FakeTransport(), make_descriptor(), callback="nope")

    @pytest.mark.asyncio
    async def test_concurrent_calls_do_not_share_query(self):
        transport = FakeTransport()
        callback = Recorder()

        first = make_descriptor(qs={"count": 1})
        second = make_descriptor(qs={"count": 2})
        await asyncio.gather(
            create_request(transport, first, callback),
            create_request(transport, second, callback),
        )

        assert [d.query for d in transport.requests] == [{"count": "1"}, {"count": "2"}]
        assert len(callback.calls) == 2


class TestReportError:
    """Тесты асинхронной доставки локальных ошибок"""

    @pytest.mark.asyncio
    async def test_callback_is_deferred(self):
        callback = Recorder()
        error = MissingParamsError(["text"])

        future = report_error(callback, error)
        assert callback.calls == []

        assert await future == "done"
        assert callback.calls == [(error, None, None)]

    @pytest.mark.asyncio
    async def test_callback_exception_propagates_to_future(self):
        def callback(error, body, response):
            raise KeyError("broken")

        with pytest.raises(KeyError):
            await report_error(callback, MissingParamsError(["text"]))

    def test_missing_params_message(self):
        error = MissingParamsError(["environment_id", "collection_id"])
        assert str(error) == "Missing required parameters: environment_id, collection_id"
        assert error.missing == ["environment_id", "collection_id"]
        assert error.kind == "missing_required_parameters"


class TestStreamMode:
    """Тесты вызова без callback"""

    @pytest.mark.asyncio
    async def test_returns_stream_without_io(self):
        transport = FakeTransport(make_response(200, {"models": []}))

        stream = create_request(transport, make_descriptor())

        assert isinstance(stream, ResponseStream)
        assert transport.requests == []

        async with stream:
            assert stream.status_code == 200
            assert await stream.read() == b'{"models": []}'

        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_iterate_chunks(self):
        transport = FakeTransport(make_response(200, "abcdef", "text/plain"))

        async with create_request(transport, make_descriptor()) as stream:
            chunks = [chunk async for chunk in stream]

        assert chunks == [b"ab", b"cdef"]

    def test_iterate_before_open(self):
        stream = ResponseStream(FakeTransport(), make_descriptor())
        with pytest.raises(RuntimeError):
            stream.__aiter__()
        assert stream.status_code is None

    @pytest.mark.asyncio
    async def test_reopen_after_failed_enter(self):
        class FlakyTransport(FakeTransport):
            def __init__(self, *responses):
                super().__init__(*responses)
                self.failures = 1

            def stream(self, descriptor):
                if self.failures:
                    self.failures -= 1
                    raise_on_enter = TransportError("Connection reset", path=descriptor.path)

                    @asynccontextmanager
                    async def failing():
                        raise raise_on_enter
                        yield

                    return failing()
                return super().stream(descriptor)

        transport = FlakyTransport(make_response(200, "ok", "text/plain"))
        stream = create_request(transport, make_descriptor())

        with pytest.raises(TransportError):
            async with stream:
                pass

        async with stream:
            assert await stream.read() == b"ok"
