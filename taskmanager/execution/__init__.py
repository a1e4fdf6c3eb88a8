from .config import RunConfig
from .convenience import (
    InMemoryServices,
    ProcessResult,
    build_processor,
    create_in_memory_services,
    process_board,
)
from .log_setup import setup_logging
