from lapor_sarpras.core.exceptions import ValidationFailed
from lapor_sarpras.models.enums import LaporanStatus

# forward order of a report's lifecycle
STATUS_ORDER = {
    LaporanStatus.MENUNGGU: 0,
    LaporanStatus.DIPROSES: 1,
    LaporanStatus.SELESAI: 2,
}

# every status may stay put or move forward (skipping is fine)
ALLOWED_TRANSITIONS = {
    current: frozenset(s for s, rank in STATUS_ORDER.items() if rank >= current_rank)
    for current, current_rank in STATUS_ORDER.items()
}

TERMINAL_STATUSES = frozenset({LaporanStatus.SELESAI})


def is_allowed(current: LaporanStatus, new: LaporanStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


def check_transition(current: LaporanStatus, new: LaporanStatus, override: bool = False) -> None:
    """Raise ValidationFailed on a backward move unless the admin overrides."""
    if is_allowed(current, new) or override:
        return
    raise ValidationFailed(
        f"Status cannot go back from '{current.value}' to '{new.value}' without override"
    )
