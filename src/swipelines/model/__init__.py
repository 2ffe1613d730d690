"""
The MODEL layer contains the card, gesture, stack and collection state.
Gesture and item logic has NO knowledge of widgets; the stateful stores
derive from QObject only to publish Qt signals.
"""
