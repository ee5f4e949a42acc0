class JournalError(Exception):
    """Base class for journal domain errors."""


class EntryNotFound(JournalError):
    def __init__(self, entry_id):
        super().__init__(f"Entry {entry_id} not found.")
        self.entry_id = entry_id


class ValidationError(JournalError):
    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        super().__init__("; ".join(errors))
        self.errors = list(errors)
