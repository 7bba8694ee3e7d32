from datetime import datetime, timedelta
from typing import Self


class Took:
    """
    Shorthand to measure time of a code block

    Examples:
        ```python
        from filespyder.util import Took

        with Took() as t:
            # do something
            log.info(f"Job took:", t.took)
        ```
    """

    def __init__(self) -> None:
        self.start = datetime.now()

    @property
    def took(self) -> timedelta:
        return datetime.now() - self.start

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args, **kwargs):
        pass
