"""Find-in-document bar: term matching, match cycling and highlighting."""

from __future__ import annotations

from typing import Optional

from quilltext.text_input import NEW_LINE, TextInput, TextInputMode


def find_matches(term: str, haystack: str, case_insensitive: bool = True) -> list[range]:
    """Return the UTF-8 byte ranges of non-overlapping occurrences of ``term``.

    Case folding, when enabled, applies to ASCII letters only.
    """
    needle = term.encode("utf-8", "surrogatepass")
    if not needle:
        return []
    hay = haystack.encode("utf-8", "surrogatepass")
    if case_insensitive:
        # bytes.lower() folds ASCII only and keeps every byte offset in place.
        needle = needle.lower()
        hay = hay.lower()

    matches: list[range] = []
    start = hay.find(needle)
    while start != -1:
        stop = start + len(needle)
        matches.append(range(start, stop))
        start = hay.find(needle, stop)
    return matches


class SearchView:
    """A single-line query field that searches another text input.

    Pressing Enter in the query runs the search; repeating it with the same
    term moves the selection to the next match, wrapping at the end.
    """

    def __init__(
        self,
        text_input: Optional[TextInput],
        query_input: Optional[TextInput] = None,
    ) -> None:
        self.text_input = text_input
        self.query_input = (
            query_input if query_input is not None else TextInput(TextInputMode.SINGLE_LINE)
        )
        self.visible = False
        self.last_term: Optional[str] = None
        self.last_highlight_idx: Optional[int] = None
        self.last_matches: Optional[list[range]] = None
        self.case_insensitive = True
        self._unsubscribe = self.query_input.subscribe(NEW_LINE, lambda _source: self.search())

    def show(self) -> None:
        """Reveal the bar and select the current query."""
        self.visible = True
        self.query_input.select_all()

    def hide(self) -> None:
        """Hide the bar and remove highlights from the searched text."""
        self.visible = False
        if self.text_input is not None:
            self.text_input.clear_highlights()

    def search(self) -> None:
        """Run the query, or step to the next match if the term is unchanged."""
        target = self.text_input
        if target is None:
            return

        term = self.query_input.content.text
        if not term:
            return

        if self.last_term == term:
            if self.last_highlight_idx is not None and self.last_matches is not None:
                matches = self.last_matches
                if matches and self.last_highlight_idx < len(matches) - 1:
                    new_idx = self.last_highlight_idx + 1
                else:
                    new_idx = 0
                self.last_highlight_idx = new_idx
                if new_idx < len(matches):
                    target.highlight(matches)
                    match = matches[new_idx]
                    target.update_selected_range_bytes(match.start, match.stop)
            return

        matches = find_matches(term, target.content.text, self.case_insensitive)
        self.last_term = term
        self.last_highlight_idx = 0
        self.last_matches = list(matches)

        target.highlight(matches)
        if matches:
            target.update_selected_range_bytes(matches[0].start, matches[0].stop)

    def toggle_case(self) -> None:
        """Switch between case-insensitive and case-sensitive matching and search again."""
        self.case_insensitive = not self.case_insensitive
        self.reset()
        self.search()

    def reset(self) -> None:
        self.last_term = None
        self.last_highlight_idx = None
        self.last_matches = None

    def has_error(self) -> bool:
        """True when the last search found nothing."""
        return self.last_matches is not None and not self.last_matches