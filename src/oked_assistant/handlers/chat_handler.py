"""HTTP handler for the chat completion endpoint.

Decodes the body, runs validation and delegates to CompletionService.
Errors are raised as OkedAssistantError subclasses and rendered by the
exception handlers registered on the app.
"""

from typing import Any

from fastapi import Request

from oked_assistant.errors import ValidationError
from oked_assistant.services import CompletionService, validate_chat_request


class ChatHandler:
    """HTTP handler for POST /api/claude.

    Example:
        ```python
        handler = ChatHandler(completion_service=service)

        @app.post("/api/claude")
        async def claude(request: Request):
            return await handler.create_completion(request)
        ```
    """

    def __init__(self, completion_service: CompletionService) -> None:
        """Initialize the chat handler.

        Args:
            completion_service: The completion service (required).
        """
        self._completions = completion_service

    async def create_completion(self, request: Request) -> dict[str, Any]:
        """Handle POST /api/claude requests.

        Args:
            request: The incoming HTTP request

        Returns:
            CompletionResult or FallbackResult payload

        Raises:
            ValidationError: If the body fails validation
            ProviderError: If both provider attempts fail
        """
        try:
            body = await request.json()
        except ValueError as e:
            raise ValidationError("Invalid request body") from e

        chat_request = validate_chat_request(body)
        return await self._completions.complete(chat_request)
