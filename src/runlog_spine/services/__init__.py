"""Services."""

from runlog_spine.services.logs import LogService

__all__ = ["LogService"]
