class RecordsError(Exception):
    status_code = 400

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__

    def to_dict(self):
        return {"error": self.__class__.__name__, "message": self.message}


class InvalidInput(RecordsError):
    status_code = 400


class DuplicateKey(RecordsError):
    status_code = 409

    def __init__(self, field, value, message=None):
        super().__init__(message or f"{field} '{value}' already exists")
        self.field = field
        self.value = value


class DuplicateUsername(DuplicateKey):
    def __init__(self, username):
        super().__init__("username", username)


class DuplicateEmail(DuplicateKey):
    def __init__(self, email):
        super().__init__("email", email)


class NotFound(RecordsError):
    status_code = 404

    def __init__(self, kind, record_id):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class InvalidCredentials(RecordsError):
    status_code = 401

    def __init__(self, message="Incorrect username or password"):
        super().__init__(message)


class Forbidden(RecordsError):
    status_code = 403


class StoreConflict(RecordsError):
    status_code = 409
