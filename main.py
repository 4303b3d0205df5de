import asyncio
import logging

from config.settings import settings

# ✅ 로깅 설정 (LOG_LEVEL 환경변수 기준)
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# HTTP 라이브러리 디버그 로그 비활성화
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)

# ✅ 컨트롤러 / 콘솔 UI 임포트
from services.controller import ClientController
from services.student_client import StudentAPIClient
from ui.console import ConsoleNotifier, run_console

logger = logging.getLogger(__name__)


async def _main() -> None:
    logger.info("%s 시작 - API: %s", settings.APP_TITLE, settings.STUDENTS_API_URL)
    client = StudentAPIClient()
    async with ClientController(ConsoleNotifier(), client) as controller:
        await run_console(controller)


def main() -> None:
    asyncio.run(_main())


if __name__ == "__main__":
    main()
