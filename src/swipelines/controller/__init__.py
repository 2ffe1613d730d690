"""
The CONTROLLER layer bridges the model to Qt and the outside world:
timers, the notice channel, the HTTP content source and its worker thread.
"""
