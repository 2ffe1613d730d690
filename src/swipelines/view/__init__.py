"""
The VIEW layer renders cards and saved lines and forwards user input
to the model. It holds no swipe or collection state of its own.
"""
