# ui/render.py

# AppState -> 텍스트 화면 변환 (순수 함수, 같은 상태면 항상 같은 출력)

from typing import List, Sequence

from schemas.app_state import AppState, StudentForm, View, VIEW_LABELS
from schemas.students import STUDENT_FIELDS

COLUMN_TITLES = ("Register No", "Name", "Department", "Year", "Phone", "Email")

FIELD_LABELS = dict(zip(STUDENT_FIELDS, COLUMN_TITLES))


def format_banner_text(title: str, width: int = 60) -> str:
    line = "=" * width
    return f"{line}\n{title:^{width}}\n{line}"


def format_nav_bar(active: View) -> str:
    items = []
    for index, view in enumerate(View, start=1):
        label = f"{index}) {VIEW_LABELS[view]}"
        items.append(f"[{label}]" if view is active else f" {label} ")
    return " ".join(items)


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(str(cell))) for w, cell in zip(widths, row)]

    def _line(cells) -> str:
        return " | ".join(f"{str(c):<{w}}" for c, w in zip(cells, widths)).rstrip()

    out = [_line(headers), "-+-".join("-" * w for w in widths)]
    out.extend(_line(row) for row in rows)
    return "\n".join(out)


def format_form(form: StudentForm) -> str:
    return "\n".join(f"  {FIELD_LABELS[f]:<12}: {getattr(form, f)}" for f in STUDENT_FIELDS)


def _render_body(state: AppState) -> List[str]:
    view = state.active_view

    if view is View.DASHBOARD:
        return [f"Total Students: {state.dashboard.total_count}"]

    if view is View.STUDENT_LIST:
        rows = [record.as_row() for record in state.student_list.rows]
        if not rows:
            return ["(no students)"]
        return [format_table(COLUMN_TITLES, rows), "", "e <reg> = Edit    d <reg> = Delete"]

    if view is View.ADD_STUDENT:
        return [format_form(state.create_form)]

    lines = [f"Search register number: {state.update_view.search_reg}"]
    if state.update_view.form_visible:
        lines += ["", format_form(state.update_view.form)]
    return lines


def render(state: AppState) -> str:
    lines = [format_banner_text(state.page_title), format_nav_bar(state.active_view), ""]
    lines += _render_body(state)
    if state.last_error is not None:
        lines += ["", f"! {state.last_error.code}: {state.last_error.message}"]
    return "\n".join(lines)
