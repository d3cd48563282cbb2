class LevelContentError(Exception):
    pass
