from __future__ import annotations

# Roughly once per second on a 30 fps source; the real frame rate is never measured.
CAPTURE_INTERVAL = 30


def should_capture(counter_value: int) -> bool:
    return counter_value % CAPTURE_INTERVAL == 0
