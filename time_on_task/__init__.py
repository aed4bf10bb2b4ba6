"""
Time on Task - active engagement metrics from the student event log
"""

__version__ = "0.1.0"

from .services.database import DatabaseManager
from .services.calculator import TimeOnTaskCalculator, process_events
from .services.formatting import format_duration
from .models.student_event import StudentEvent

__all__ = [
    'DatabaseManager',
    'TimeOnTaskCalculator',
    'process_events',
    'format_duration',
    'StudentEvent',
]
