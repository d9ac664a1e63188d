"""
⚠️ Ledger Errors
أخطاء سجل النقاط
"""


class LedgerError(Exception):
    """الخطأ الأساسي لكل أخطاء سجل النقاط"""


class StorageCorrupt(LedgerError):
    """ملف النقاط موجود لكن لا يمكن قراءته أو بنيته غير صحيحة"""

    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"ملف النقاط تالف ({self.path}): {reason}")


class StorageWriteFailure(LedgerError):
    """فشل حفظ ملف النقاط بعد مطالبة ناجحة"""

    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"فشل حفظ ملف النقاط ({self.path}): {reason}")


class InvalidInput(LedgerError, ValueError):
    pass
