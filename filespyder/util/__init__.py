from filespyder.util.misc import Took

__all__ = ["Took"]
