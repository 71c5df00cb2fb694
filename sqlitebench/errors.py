class BenchmarkError(Exception):
    """Raised when a benchmark run cannot complete.

    Args:
        driver: Label or identifier of the driver that failed
        step: Step that failed: open, create, insert, setup or query
        message: Human readable description
    """

    def __init__(self, driver: str, step: str, message: str):
        super().__init__(message)
        self.driver = driver
        self.step = step
        self.message = message

    def __str__(self):
        if self.__cause__ is not None:
            return f"[{self.driver}] {self.message}: {self.__cause__}"
        return f"[{self.driver}] {self.message}"
