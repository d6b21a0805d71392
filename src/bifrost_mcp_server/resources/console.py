"""Console log resource backed by the server's LogBuffer"""

from ..core.log_buffer import LogBuffer
from ..core.resources import Resource
from ..core.types import ReadResourceParams, ResourceReadResult

DEFAULT_READ_LIMIT = 100


class ConsoleLogsResource(Resource):
    uri = "app://console/logs"
    name = "Console Logs"
    description = "Most recent log messages of the host application"

    def __init__(self, buffer: LogBuffer, read_limit: int = DEFAULT_READ_LIMIT):
        super().__init__()
        self.buffer = buffer
        self.read_limit = read_limit

    async def read(self, params: ReadResourceParams) -> ResourceReadResult:
        total, entries = self.buffer.snapshot(self.read_limit)
        return self.json_result(
            params,
            {
                "totalLogs": total,
                "returnedLogs": len(entries),
                "logs": [entry.to_dict() for entry in entries],
            },
        )
