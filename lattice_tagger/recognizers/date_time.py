"""Date and time expression recognizer."""

from ..models import PosTag, Term, TermGraph, TermPath
from ..utils.chars import is_digit
from .base import Recognizer

# Units that turn a preceding numeral into a date/time piece
DATETIME_UNITS = frozenset({
    "世纪", "年代", "年", "月份", "月", "日", "号", "点钟", "时", "点", "分", "秒",
})

# Words that may follow a Chinese numeral + 点 on a clock reading
CLOCK_FOLLOWERS = frozenset({"钟", "整", "半"})


class DateTimeRecognizer(Recognizer):
    """
    Merges numeral + unit pieces ("2023年", "5月", "1日") into one ``t`` term.

    Lexicon time words next to such pieces ("今年5月", "下午3点") join the
    same term. The merged reading competes with the upstream path.
    """

    name = "datetime"

    def _is_piece(self, content: list[Term], j: int) -> bool:
        if not (
            j + 1 < len(content)
            and content[j].tag is PosTag.NUMERAL
            and content[j + 1].surface in DATETIME_UNITS
        ):
            return False
        if content[j + 1].surface != "点" or all(is_digit(ch) for ch in content[j].surface):
            return True
        # "一点" is a quantity unless a time word or clock reading surrounds it
        if j > 0 and content[j - 1].tag is PosTag.TIME:
            return True
        if j + 2 < len(content):
            following = content[j + 2]
            return following.surface[0] in CLOCK_FOLLOWERS or self._is_piece(content, j + 2)
        return False

    def find_spans(self, content: list[Term]) -> list[tuple[int, int]]:
        """Term index ranges ``[i, j)`` to merge into time expressions."""
        spans = []
        i = 0
        while i < len(content):
            j = i
            numeral_pieces = 0
            while j < len(content):
                if self._is_piece(content, j):
                    j += 2
                    numeral_pieces += 1
                elif content[j].tag is PosTag.TIME:
                    j += 1
                else:
                    break
            if numeral_pieces and j - i >= 2:
                spans.append((i, j))
            i = max(j, i + 1)
        return spans

    def process(self, graph: TermGraph) -> list[TermPath]:
        path = self.source_path(graph)
        content = path.content
        spans = self.find_spans(content)
        if not spans:
            return [path]

        merged = path
        for i, j in spans:
            merged = self.merge(merged, graph, content[i].start, content[j - 1].end, PosTag.TIME)
        return self.with_origin([merged], path)
