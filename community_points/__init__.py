"""
💎 Community Points
سجل نقاط المجتمع وأوامر البوت
"""

from .errors import InvalidInput, LedgerError, StorageCorrupt, StorageWriteFailure
from .points import Ledger, PointRecord

__all__ = [
    'Ledger',
    'PointRecord',
    'LedgerError',
    'StorageCorrupt',
    'StorageWriteFailure',
    'InvalidInput'
]
