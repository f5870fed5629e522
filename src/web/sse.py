import asyncio
import json
from src.domain.models import SystemEvent
from src.web.serializers import json_serializer, serialize_event

# Global state for SSE
connected_queues = set()
shutdown_event = asyncio.Event()

async def broadcast_event(event: SystemEvent):
    """Broadcasts a system event to all connected SSE clients."""
    data = json.dumps(serialize_event(event), default=json_serializer)

    for queue in connected_queues:
        await queue.put(data)
