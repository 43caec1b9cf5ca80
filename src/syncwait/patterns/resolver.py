"""Manual resolver pairs for hand-driven signaling."""

import asyncio

from syncwait.core.models import ResolverPair


def syncer() -> ResolverPair:
    """Create a pending token and the function that settles it.

    The token settles with None the first time ``resume`` is called; later
    calls are no-ops. There is no timeout and no error path, so a ``resume``
    that is never called leaves the token pending forever.

    Returns:
        ResolverPair: ``(resume, token)``.

    Example:
        ```python
        resume, token = syncer()
        loop.call_later(1.0, resume)
        await token
        ```
    """
    token: asyncio.Future[None] = asyncio.get_running_loop().create_future()

    def resume() -> None:
        if not token.done():
            token.set_result(None)

    return ResolverPair(resume=resume, token=token)
