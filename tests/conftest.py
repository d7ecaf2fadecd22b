import os
import sys
import tempfile

# Keep test runs from writing log files into the working tree
os.environ.setdefault('LOG_DIR', os.path.join(tempfile.gettempdir(), 'playgroup_stats_test_logs'))

sys.path.insert(0, os.path.dirname(__file__))
