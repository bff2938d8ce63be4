import os

# Qt must never try to reach a real display during tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
