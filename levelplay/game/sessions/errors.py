class GameSessionError(Exception):
    pass


class SessionDisposedError(GameSessionError):
    pass


class InvalidLevelDataError(GameSessionError):
    pass


class SessionNotInitializedError(GameSessionError):
    pass
