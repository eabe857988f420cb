"""Built-in game content."""

from weilegend.content.catalogue import DEFAULT_CONTENT, INITIAL_ITEMS, build_default_content

__all__ = ["DEFAULT_CONTENT", "INITIAL_ITEMS", "build_default_content"]
