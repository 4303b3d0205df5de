# ui/console.py

"""
콘솔 프론트엔드

- ConsoleNotifier: alert/confirm을 print/input으로 처리
- run_console(): 명령 입력 → 컨트롤러 호출 → 상태 변경 시 화면 다시 그리기
- input()은 블로킹이므로 asyncio.to_thread로 실행해 이벤트 루프를 막지 않음 (confirm 포함)
- 폼 입력: 빈 값은 기존 값 유지, "-"는 필드 비우기
"""

import asyncio
import logging
from typing import Callable

from schemas.app_state import View
from schemas.students import STUDENT_FIELDS
from services.controller import ClientController
from ui.render import FIELD_LABELS, render

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Commands: 1-4 navigate | r refresh | a add | s search | u update | "
    "c cancel | e <reg> edit | d <reg> delete | q quit"
)

NAV_KEYS = {str(i): view for i, view in enumerate(View, start=1)}

# 폼 입력 시 필드를 비우는 값
CLEAR_MARK = "-"


class ConsoleNotifier:

    def __init__(self, input_fn: Callable[[str], str] = input, print_fn: Callable[..., None] = print):
        self._input = input_fn
        self._print = print_fn

    def alert(self, message: str) -> None:
        self._print(f"\n>> {message}")

    async def confirm(self, message: str) -> bool:
        while True:
            choice = await asyncio.to_thread(self._input, f"{message} (y/n): ")
            choice = choice.strip().lower()
            if choice in ("y", "yes"):
                return True
            if choice in ("n", "no"):
                return False
            self._print("Invalid selection. Please try again.")


class ConsoleApp:

    def __init__(self, controller: ClientController, input_fn: Callable[[str], str] = input,
                 print_fn: Callable[..., None] = print):
        self.controller = controller
        self._input = input_fn
        self._print = print_fn
        controller.subscribe(self._redraw)

    def _redraw(self, state) -> None:
        self._print("\n" + render(state))

    async def _ask(self, prompt: str) -> str:
        return await asyncio.to_thread(self._input, prompt)

    async def _fill_form(self, setter, current) -> None:
        """빈 입력이면 기존 값 유지, CLEAR_MARK 입력이면 빈 값으로"""
        for field in STUDENT_FIELDS:
            value = await self._ask(f"{FIELD_LABELS[field]} [{getattr(current(), field)}]: ")
            if value == CLEAR_MARK:
                setter(field, "")
            elif value:
                setter(field, value)

    async def handle(self, command: str) -> bool:
        """명령 하나 처리. False면 종료"""
        ctrl = self.controller
        cmd, _, arg = command.strip().partition(" ")
        arg = arg.strip()

        if cmd == "q":
            return False
        elif cmd in NAV_KEYS:
            await ctrl.navigate(NAV_KEYS[cmd])
        elif cmd == "r":
            await ctrl.refresh()
        elif cmd == "a":
            await ctrl.navigate(View.ADD_STUDENT)
            await self._fill_form(ctrl.set_create_field, lambda: ctrl.state.create_form)
            await ctrl.submit_create()
        elif cmd == "s":
            ctrl.set_search_reg(arg or await self._ask("Register number: "))
            await ctrl.search_student()
        elif cmd == "u":
            if not ctrl.state.update_view.form_visible:
                self._print("Search for a student first (s <reg>).")
            else:
                await self._fill_form(ctrl.set_update_field, lambda: ctrl.state.update_view.form)
                await ctrl.submit_update()
        elif cmd == "c":
            ctrl.cancel_update()
        elif cmd in ("e", "d") and arg:
            if cmd == "e":
                await ctrl.edit_student(arg)
            else:
                await ctrl.delete_student(arg)
        elif cmd:
            self._print(HELP_TEXT)
        return True

    async def run(self) -> None:
        self._print(HELP_TEXT)
        await self.controller.start()
        while True:
            command = await self._ask("> ")
            if not await self.handle(command):
                break


async def run_console(controller: ClientController) -> None:
    app = ConsoleApp(controller, input_fn=input, print_fn=print)
    try:
        await app.run()
    except (EOFError, KeyboardInterrupt):
        logger.info("콘솔 종료")
