"""
Score, money and upgrade purchases.
NO UI DEPENDENCIES.
"""
import logging
from enum import Enum, auto
from typing import Dict, List

from .constants import COOLING_COST, CAPACITY_COST, REPAIR_COST
from .events import GameEvent, UpgradePurchasedEvent
from .servers import Server, ServerStatus
from .state import GameState

logger = logging.getLogger(__name__)


class UpgradeType(Enum):
    """Commands the player can buy for a server."""
    COOLING = auto()    # +cooling rate, repeatable
    CAPACITY = auto()   # -processing power, down to a floor
    REPAIR = auto()     # end a reboot immediately


UPGRADE_COSTS: Dict[UpgradeType, int] = {
    UpgradeType.COOLING: COOLING_COST,
    UpgradeType.CAPACITY: CAPACITY_COST,
    UpgradeType.REPAIR: REPAIR_COST,
}

# Server status each upgrade requires at purchase time
UPGRADE_REQUIRES: Dict[UpgradeType, ServerStatus] = {
    UpgradeType.COOLING: ServerStatus.ACTIVE,
    UpgradeType.CAPACITY: ServerStatus.ACTIVE,
    UpgradeType.REPAIR: ServerStatus.REBOOTING,
}


class Ledger:
    """
    Bookkeeping for score and money on a GameState.

    Money only leaves through purchase(), which checks funds and the
    server's status first. A rejected purchase changes nothing and
    raises nothing.
    """

    def __init__(self, state: GameState):
        self.state = state

    def record_delivery(self, value: int) -> int:
        """
        Credit a processed packet.
        Returns the money earned.
        """
        earned = value // 2
        self.state.score += value
        self.state.money += earned
        return earned

    def can_afford(self, upgrade: UpgradeType) -> bool:
        return self.state.money >= UPGRADE_COSTS[upgrade]

    def can_purchase(self, server: Server, upgrade: UpgradeType) -> bool:
        """Check funds and the server's status for an upgrade."""
        return self.can_afford(upgrade) and server.status == UPGRADE_REQUIRES[upgrade]

    def purchase(self, server: Server, upgrade: UpgradeType) -> List[GameEvent]:
        """
        Buy an upgrade for a server.
        Returns the resulting events, or an empty list if rejected.
        """
        if not self.can_purchase(server, upgrade):
            logger.debug(
                f"Rejected {upgrade.name} for {server.name} "
                f"(money={self.state.money}, status={server.status.name})"
            )
            return []

        cost = UPGRADE_COSTS[upgrade]
        self.state.money -= cost
        events: List[GameEvent] = [UpgradePurchasedEvent(server.id, upgrade, cost)]

        if upgrade == UpgradeType.COOLING:
            server.upgrade_cooling()
        elif upgrade == UpgradeType.CAPACITY:
            server.upgrade_capacity()
        elif upgrade == UpgradeType.REPAIR:
            events.append(server.repair())

        return events
