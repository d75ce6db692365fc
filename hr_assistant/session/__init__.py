from .presentation import select
from .state import DocumentSlot, SessionState, Slot, SourceKind, reduce

__all__ = ["DocumentSlot", "SessionState", "Slot", "SourceKind", "reduce", "select"]
