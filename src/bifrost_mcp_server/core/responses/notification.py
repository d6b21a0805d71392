"""
MCP Notification Factories

Notifications are one-way messages with no response expected. The server
has no push transport; these objects are delivered to in-process listeners.
"""

from ..types.mcp import JSONRPCNotification


class NotificationResponse:
    """Factory for MCP notifications"""

    @staticmethod
    def tools_list_changed() -> JSONRPCNotification:
        """Sent when the set of registered tools changed"""
        return JSONRPCNotification(method="notifications/tools/list_changed")

    @staticmethod
    def resources_list_changed() -> JSONRPCNotification:
        """Sent when the set of registered resources changed"""
        return JSONRPCNotification(method="notifications/resources/list_changed")

    @staticmethod
    def resource_updated(uri: str) -> JSONRPCNotification:
        """Sent to subscribers when a resource's contents changed

        Args:
            uri: URI of the updated resource
        """
        return JSONRPCNotification(
            method="notifications/resources/updated", params={"uri": uri}
        )

