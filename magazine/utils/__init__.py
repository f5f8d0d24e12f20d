# magazine/utils/__init__.py
"""
공용 유틸리티 패키지
"""

from .datetime_utils import (
    DateTimeUtils,
    for_firestore, from_firestore,
    snapshot_to_dict
)

__all__ = [
    'DateTimeUtils',
    'for_firestore', 'from_firestore',
    'snapshot_to_dict'
]
