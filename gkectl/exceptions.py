"""
gkectl exceptions
"""


class GkectlError(Exception):
    """Base exception for all gkectl errors"""
    def __init__(self, message, code=None, details=None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class UsageError(GkectlError):
    """Malformed or incomplete command line input"""
    pass


class PreconditionError(GkectlError):
    """Environment is not ready to run any cluster operation"""
    pass


class RemoteError(GkectlError):
    """A gcloud call failed or returned nothing usable"""

    def __init__(self, message, returncode=None, command=None, stderr=None):
        super().__init__(message, code=returncode, details={"command": command, "stderr": stderr})
        self.returncode = returncode
        self.command = command
        self.stderr = stderr

    @property
    def exit_code(self) -> int:
        """Exit code to hand back to the shell.

        A gcloud killed by signal N reports -N; shells report that as 128 + N.
        """
        if self.returncode is not None and self.returncode < 0:
            return 128 - self.returncode
        return self.returncode or 1
