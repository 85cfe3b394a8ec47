import time


def sleep(seconds: float) -> None:
    """
    Equivalent to time.sleep(), kept as a module-level function so callers can swap it out.
    """
    time.sleep(seconds)
