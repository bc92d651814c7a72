"""
runlog-spine - Run log retrieval for a distributed task-execution platform.

Given a run id, locates the run's log stream, fetches output written since a
previous cursor and returns the text plus the cursor to resume from.
"""

__version__ = "0.1.0"

from runlog_spine.core.models import LogChunk
from runlog_spine.logs import new_logs_client
from runlog_spine.services.logs import LogService

__all__ = ["LogChunk", "LogService", "new_logs_client", "__version__"]
