"""
Replacement table - Literal renames treated as mechanical noise

Rules are applied in order and each rule sees the output of the previous
ones, so a token must come before any shorter token that is its prefix.
"""

from __future__ import annotations

from collections.abc import Iterable

from models.diff import Replacement

# ui::EventType enumerators moved from unscoped ET_* names to EventType::k*.
_EVENT_TYPE_RENAMES = [
    ("ET_UNKNOWN", "EventType::kUnknown"),
    ("ET_MOUSE_PRESSED", "EventType::kMousePressed"),
    ("ET_MOUSE_DRAGGED", "EventType::kMouseDragged"),
    ("ET_MOUSE_RELEASED", "EventType::kMouseReleased"),
    ("ET_MOUSE_MOVED", "EventType::kMouseMoved"),
    ("ET_MOUSE_ENTERED", "EventType::kMouseEntered"),
    ("ET_MOUSE_EXITED", "EventType::kMouseExited"),
    ("ET_KEY_PRESSED", "EventType::kKeyPressed"),
    ("ET_KEY_RELEASED", "EventType::kKeyReleased"),
    ("ET_MOUSEWHEEL", "EventType::kMousewheel"),
    ("ET_MOUSE_CAPTURE_CHANGED", "EventType::kMouseCaptureChanged"),
    ("ET_TOUCH_RELEASED", "EventType::kTouchReleased"),
    ("ET_TOUCH_PRESSED", "EventType::kTouchPressed"),
    ("ET_TOUCH_MOVED", "EventType::kTouchMoved"),
    ("ET_TOUCH_CANCELLED", "EventType::kTouchCancelled"),
    ("ET_DROP_TARGET_EVENT", "EventType::kDropTargetEvent"),
    ("ET_GESTURE_SCROLL_BEGIN", "EventType::kGestureScrollBegin"),
    ("ET_GESTURE_TYPE_START", "EventType::kGestureTypeStart"),
    ("ET_GESTURE_SCROLL_END", "EventType::kGestureScrollEnd"),
    ("ET_GESTURE_SCROLL_UPDATE", "EventType::kGestureScrollUpdate"),
    ("ET_GESTURE_TAP_DOWN", "EventType::kGestureTapDown"),
    ("ET_GESTURE_TAP_CANCEL", "EventType::kGestureTapCancel"),
    ("ET_GESTURE_TAP_UNCONFIRMED", "EventType::kGestureTapUnconfirmed"),
    # Listed after the ET_GESTURE_TAP_* names so it does not clobber them.
    ("ET_GESTURE_TAP", "EventType::kGestureTap"),
    ("ET_GESTURE_DOUBLE_TAP", "EventType::kGestureDoubleTap"),
    ("ET_GESTURE_BEGIN", "EventType::kGestureBegin"),
    ("ET_GESTURE_END", "EventType::kGestureEnd"),
    ("ET_GESTURE_TWO_FINGER_TAP", "EventType::kGestureTwoFingerTap"),
    ("ET_GESTURE_PINCH_BEGIN", "EventType::kGesturePinchBegin"),
    ("ET_GESTURE_PINCH_END", "EventType::kGesturePinchEnd"),
    ("ET_GESTURE_PINCH_UPDATE", "EventType::kGesturePinchUpdate"),
    ("ET_GESTURE_SHORT_PRESS", "EventType::kGestureShortPress"),
    ("ET_GESTURE_LONG_PRESS", "EventType::kGestureLongPress"),
    ("ET_GESTURE_LONG_TAP", "EventType::kGestureLongTap"),
    ("ET_GESTURE_SWIPE", "EventType::kGestureSwipe"),
    ("ET_GESTURE_SHOW_PRESS", "EventType::kGestureShowPress"),
    ("ET_SCROLL_FLING_START", "EventType::kScrollFlingStart"),
    ("ET_SCROLL_FLING_CANCEL", "EventType::kScrollFlingCancel"),
    # Listed after the ET_SCROLL_FLING_* names so it does not clobber them.
    ("ET_SCROLL", "EventType::kScroll"),
    ("ET_GESTURE_TYPE_END", "EventType::kGestureTypeEnd"),
    ("ET_CANCEL_MODE", "EventType::kCancelMode"),
    ("ET_UMA_DATA", "EventType::kUmaData"),
    ("ET_LAST", "EventType::kLast"),
    # Old code sometimes spelled out ui::EventType::ET_FOO; the rules above
    # turn that into EventType::EventType::kFoo.
    ("EventType::EventType::", "EventType::"),
]

REPLACEMENTS: tuple[Replacement, ...] = tuple(
    Replacement(before=before, after=after) for before, after in _EVENT_TYPE_RENAMES
)


def apply_replacements(text: str, rules: Iterable[Replacement] = REPLACEMENTS) -> str:
    """Apply each rule's literal substitution in order, feeding results forward"""
    for rule in rules:
        text = text.replace(rule.before, rule.after)
    return text
