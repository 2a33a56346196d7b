class MissingUrlError(Exception):
    def __init__(self, message: str = "URL não fornecida."):
        self.message = message
        super().__init__(message)


class ScrapeFailedError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
