# =============================================================================
# guerrilla-tui Core Module
# =============================================================================
# Core domain models. These are plain dataclasses with no external
# dependencies, so they can be imported anywhere without causing circular
# imports.
#
#   - Message: A received email, as delivered by the mail service
# =============================================================================

from guerrilla_tui.core.message import Message

__all__ = ["Message"]
