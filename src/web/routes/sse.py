import asyncio
from quart import Blueprint, request, make_response
from src.web.sse import connected_queues, shutdown_event

sse_bp = Blueprint('sse', __name__)

@sse_bp.route("/api/events/stream")
async def event_stream():
    if "text/event-stream" not in request.accept_mimetypes:
        return "SSE only", 400

    queue = asyncio.Queue()
    connected_queues.add(queue)

    async def generator():
        try:
            while not shutdown_event.is_set():
                try:
                    data = await asyncio.wait_for(queue.get(), timeout=1.0)
                    yield f"data: {data}\n\n"
                except asyncio.TimeoutError:
                    yield ": heartbeat\n\n"
        except asyncio.CancelledError:
            pass
        finally:
            connected_queues.discard(queue)

    response = await make_response(generator())

    setattr(response, 'timeout', None)

    response.headers['Content-Type'] = 'text/event-stream'
    response.headers['Cache-Control'] = 'no-cache'
    response.headers['Connection'] = 'keep-alive'
    return response
