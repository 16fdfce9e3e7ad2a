# ABOUTME: Core orchestration for bookinfo lookups and writes.
# ABOUTME: Exports the read-through sync service.

from bookinfo.core.sync import BookInfoService

__all__ = ["BookInfoService"]
