"""Run-level text helpers shared by the slide and document renderers

Both python-pptx and python-docx expose runs with a read/write ``text``
property and an underlying ``_r`` element, so placeholder replacement and
range splitting can be written once.
"""

from __future__ import annotations

from copy import deepcopy


def paragraph_text(runs) -> str:
    return "".join(run.text for run in runs)


def replace_in_runs(runs, token: str, value: str) -> int:
    """
    Replace every occurrence of token in a paragraph's runs.

    Tokens inside a single run keep that run's formatting. A token split
    across runs is rewritten into the run where it starts and the other
    runs it covered are emptied.

    Returns:
        Number of replacements made
    """
    runs = list(runs)
    count = 0
    for run in runs:
        text = run.text
        if token in text:
            count += text.count(token)
            run.text = text.replace(token, value)

    search_from = 0
    while True:
        texts = [run.text for run in runs]
        joined = "".join(texts)
        start = joined.find(token, search_from)
        if start == -1:
            return count
        end = start + len(token)
        first = last = None
        offset = 0
        for i, text in enumerate(texts):
            run_start, run_end = offset, offset + len(text)
            if first is None and run_start <= start < run_end:
                first = (i, start - run_start)
            if first is not None and run_start < end <= run_end:
                last = (i, end - run_start)
                break
            offset = run_end
        (fi, fo), (li, lo) = first, last
        runs[fi].text = texts[fi][:fo] + value + texts[li][lo:]
        for k in range(fi + 1, li + 1):
            runs[k].text = ""
        count += 1
        search_from = start + len(value)


def _clone_run(run, wrap_run, before: bool):
    new_r = deepcopy(run._r)
    if before:
        run._r.addprevious(new_r)
    else:
        run._r.addnext(new_r)
    return wrap_run(new_r, run)


def split_runs(paragraphs, start: int, end: int, wrap_run) -> list:
    """
    Split runs so that [start, end) is covered by whole runs, and return them.

    Args:
        paragraphs: Run lists, one per paragraph, in text order; offsets
            count one separator character between paragraphs
        start: First character offset (inclusive)
        end: Last character offset (exclusive)
        wrap_run: Callable (r_element, sibling_run) -> run proxy for a cloned run

    Returns:
        Runs whose combined text is exactly the requested range
    """
    selected = []
    offset = 0
    for runs in paragraphs:
        for run in list(runs):
            text = run.text
            run_start, run_end = offset, offset + len(text)
            offset = run_end
            lo, hi = max(start, run_start), min(end, run_end)
            if lo >= hi:
                continue
            a, b = lo - run_start, hi - run_start
            if b < len(text):
                _clone_run(run, wrap_run, before=False).text = text[b:]
            if a > 0:
                _clone_run(run, wrap_run, before=True).text = text[:a]
            run.text = text[a:b]
            selected.append(run)
        offset += 1
    return selected
