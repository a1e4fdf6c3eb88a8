from board_tui.app import run_board

run_board()
