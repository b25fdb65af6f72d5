from pathlib import PurePath

from starlette.exceptions import HTTPException
from starlette.staticfiles import StaticFiles


class PublicFiles(StaticFiles):
    """Serves the front-end bundle but never dotfiles such as .env."""

    async def get_response(self, path: str, scope):
        if any(part.startswith(".") for part in PurePath(path).parts):
            raise HTTPException(status_code=404)
        return await super().get_response(path, scope)
