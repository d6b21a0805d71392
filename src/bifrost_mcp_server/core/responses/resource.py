"""
Resource Result Factories

Builders for the ResourceReadResult envelope.
"""

import json
from typing import Any

from ..types.mcp import ResourceContents, ResourceReadResult


class ResourceResponse:
    """Factory for resource read results

    Examples:

    # JSON snapshot
    ResourceResponse.json_result("app://selection", {"activeObject": "Cube"})

    # Plain text
    ResourceResponse.text_result("app://readme", "hello", "text/plain")
    """

    @staticmethod
    def text_result(uri: str, text: str, mime_type: str) -> ResourceReadResult:
        """Create a read result holding text

        Args:
            uri: URI that was read
            text: Resource text
            mime_type: MIME type of the text

        Returns:
            ResourceReadResult with a single contents block
        """
        return ResourceReadResult(
            contents=[ResourceContents(uri=uri, mime_type=mime_type, text=text)]
        )

    @staticmethod
    def json_result(uri: str, data: Any) -> ResourceReadResult:
        """Create a read result holding an indented JSON document

        Args:
            uri: URI that was read
            data: JSON-serializable snapshot

        Returns:
            ResourceReadResult tagged application/json
        """
        text = json.dumps(data, indent=2, default=str)
        return ResourceResponse.text_result(uri, text, "application/json")
