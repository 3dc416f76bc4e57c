"""Two-line list row used by the preview gallery."""

from __future__ import annotations

from ..core.views import HStack, Spacer, Text, View, VStack

__all__ = ["TitleSubtitleRow"]

SECONDARY_LABEL = "#6c6c70"


class TitleSubtitleRow(View):
    def __init__(self, title: str, subtitle: str) -> None:
        self.title = title
        self.subtitle = subtitle

    def body(self) -> View:
        return HStack(
            VStack(
                Text(self.title).font(11, bold=True).padding(4),
                Text(self.subtitle).font(9).foreground(SECONDARY_LABEL).padding(4),
                spacing=0,
            ),
            Spacer(),
            Text("›").foreground(SECONDARY_LABEL).padding(8),
        )

    def build(self):
        return self.body().build()

    def describe(self) -> str:
        return f"TitleSubtitleRow({self.title!r}, {self.subtitle!r})"
