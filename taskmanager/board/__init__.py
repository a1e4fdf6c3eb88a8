from .models import Board, BoardFormatError
from .scanner import STATUS_FOLDERS, scan_board

__all__ = ["Board", "BoardFormatError", "STATUS_FOLDERS", "scan_board"]
