"""External service integrations.

- Generation: LangChain chat model adapted to a ``generate(prompt)`` interface
- Supabase: trips, stops, activities and profiles in the hosted database

Example Usage:
    >>> from globetrotter.core.config import ApiSettings
    >>> from globetrotter.services import create_supabase_client, create_text_generator
    >>>
    >>> settings = ApiSettings.from_env()
    >>> generator = create_text_generator(settings)
    >>> store = create_supabase_client(settings)
"""

from globetrotter.services.generation import (
    ChatModelGenerator,
    TextGenerator,
    create_chat_model,
    create_text_generator,
)
from globetrotter.services.supabase import (
    AuthUser,
    SupabaseClient,
    create_supabase_client,
)

__all__ = [
    "ChatModelGenerator",
    "TextGenerator",
    "create_chat_model",
    "create_text_generator",
    "AuthUser",
    "SupabaseClient",
    "create_supabase_client",
]
