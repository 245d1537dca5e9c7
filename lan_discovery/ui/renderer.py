"""
Screen rendering for the interactive session.

``render`` turns the session state into a Frame of plain text lines. It has
no side effects; the terminal layer decides where and how to paint it.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..core.data_models import SessionStage
from ..core.session import SessionStateMachine

STATUS_TEXT = " Press `q` or `ctrl+c` to quit. "

# Rows taken by the status bar, the box border and the margins
RESULT_ROWS_RESERVED = 6


@dataclass
class Frame:
    """
    Text content of one screen.

    Attributes:
        lines: Lines shown inside the centered box
        highlight: Index of the highlighted line, None for no highlight
        status: Status bar text
    """
    lines: List[str] = field(default_factory=list)
    highlight: Optional[int] = None
    status: str = STATUS_TEXT


def interface_row(name: str, hardware_address: str, mtu: int) -> str:
    return " %10s %17s %5d " % (name, hardware_address, mtu)


def address_row(address: str) -> str:
    return " %42s " % address


def result_row(ip_address: str, hardware_address: str, vendor: str) -> str:
    return " %-15s %17s %s " % (ip_address, hardware_address, vendor)


def _fit(lines: List[str], width: int) -> List[str]:
    # Leave room for the left and right border of the box
    limit = max(width - 2, 0)
    return [line[:limit] for line in lines]


def render(machine: SessionStateMachine, width: int, height: int) -> Frame:
    """
    Render the current stage of ``machine``.

    Args:
        machine: Session state to display
        width: Terminal width in columns
        height: Terminal height in rows

    Returns:
        Frame for the popup when one is active, otherwise for the stage
    """
    if machine.popup is not None:
        return Frame(lines=_fit(["", f" {machine.popup} ", ""], width))

    if machine.stage is SessionStage.SELECT_INTERFACE:
        lines = [interface_row(iface.name, iface.hardware_address, iface.mtu)
                 for iface in machine.interfaces]
        return Frame(lines=_fit(lines, width), highlight=machine.selection if lines else None)

    if machine.stage is SessionStage.SELECT_ADDRESS:
        lines = [address_row(str(address)) for address in machine.addresses]
        return Frame(lines=_fit(lines, width), highlight=machine.selection if lines else None)

    rows = max(height - RESULT_ROWS_RESERVED, 0)
    hosts = machine.results.most_recent_first(rows) if machine.results is not None else []
    lines = [result_row(host.ip_address, host.hardware_address, host.vendor) for host in hosts]
    lines.extend([""] * (rows - len(lines)))
    return Frame(lines=_fit(lines, width))
