# Text renderer: draws a full frame from a board snapshot

from state.game_state import GameState

STATUS_LINES = {
    GameState.PAUSED: "PAUSED",
    GameState.WON: "YOU WON!",
    GameState.LOST: "GAME OVER",
    GameState.REVEAL: "CODE REVEALED",
}


def format_time(total_ms):
    """Format play time as MM:SS."""
    seconds = total_ms // 1000
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def feedback_cells(black, white, length, colors):
    cells = [colors["BK"]] * black + [colors["W"]] * white
    cells += ["  "] * (length - black - white)
    return cells


def button_hints(snapshot):
    if snapshot.state is GameState.PAUSED:
        return "[o] Resume  [p] Exit"
    if snapshot.state in (GameState.WON, GameState.LOST):
        return "[o] New game  [q] Exit"
    if snapshot.state is GameState.REVEAL:
        return "[o] Back  [q] Exit"
    ok = "  [o] OK" if snapshot.can_submit else ""
    return f"[w/s] colors  [a/d] move{ok}  [r] Reveal  [p] Pause"


def render_board(snapshot, width=8):
    """
    Render a text frame of the board.

    Args:
        snapshot (GameSnapshot): Read-only board state.
        width (int): Number of cells per row separator.
    Returns:
        str: The frame, ready to print.
    """
    rules = snapshot.rules
    colors = rules["display"]["emoji_map"]
    length = rules["code_length"]
    line = "+----" * width + "+"

    frame = [
        line,
        f"| Hirn ({rules['name']})"
        f"   T: {format_time(snapshot.total_time_ms)}"
        f"   A: {snapshot.attempts_used}({snapshot.max_attempts})",
        line,
    ]

    # Past attempts, newest last
    rows = rules["display"].get("history_rows", 1)
    shown = snapshot.guesses[-rows:] if rows else []
    for guess in shown:
        black, white = guess.get_feedback()
        row = "".join("| " + colors[c.symbol] + " " for c in guess.get_guess())
        row += "".join(
            "| " + cell + " " for cell in feedback_cells(black, white, length, colors)
        )
        frame.append(row + "|")
    if shown:
        frame.append(line)

    # Current guess with cursor
    row = ""
    for i, color in enumerate(snapshot.current_guess):
        cell = colors[color.symbol]
        if i == snapshot.cursor_position and snapshot.state is GameState.PLAYING:
            row += "|[" + cell + "]"
        else:
            row += "| " + cell + " "
    frame.append(row + "|")
    frame.append(line)

    status = STATUS_LINES.get(snapshot.state)
    if status:
        frame.append(status)
    if snapshot.secret_code is not None:
        code = "".join(colors[s] for s in snapshot.secret_code)
        frame.append(f"Code: {code}")
    frame.append(button_hints(snapshot))
    return "\n".join(frame)
