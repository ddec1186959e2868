from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.staticfiles import StaticFiles
from starlette.types import Scope


class FrontendStaticFiles(StaticFiles):
    """
    프론트엔드 빌드 서빙. 파일이 없는 경로는 index.html로 돌려서
    클라이언트 라우팅(/employees/123 등)이 새로고침에도 동작하게 한다.
    API 경로는 대상에서 제외해서 JSON 404가 그대로 나간다.
    """

    def __init__(self, *, api_prefix: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_prefix = api_prefix.rstrip("/")

    def is_api_path(self, scope: Scope) -> bool:
        path = scope["path"]
        if not self.api_prefix:
            return False
        return path == self.api_prefix or path.startswith(self.api_prefix + "/")

    async def get_response(self, path: str, scope: Scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404 or self.is_api_path(scope):
                raise
            return await super().get_response("index.html", scope)
