import re

# typo budget for short control words ("todey", "bugn")
MAX_TYPO_DISTANCE = 2

_TURKISH_FOLD = str.maketrans({
    "ğ": "g",
    "ü": "u",
    "ş": "s",
    "ç": "c",
    "ö": "o",
})


def normalize(text: str) -> str:
    """Lowercase, fold Turkish letters to ASCII and collapse whitespace.

    Both dotted and dotless capital I fold to "i". Lowercase dotless "ı" is
    left alone, so "haftalık" stays "haftalık".
    """
    s = (text or "").strip()
    s = s.replace("İ", "i").replace("I", "i")
    s = s.lower().translate(_TURKISH_FOLD)
    return re.sub(r"\s+", " ", s)


def edit_distance(a: str, b: str) -> int:
    a = a or ""
    b = b or ""
    m, n = len(a), len(b)
    if not m:
        return n
    if not n:
        return m
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j] + 1,
                dp[i][j - 1] + 1,
                dp[i - 1][j - 1] + cost,
            )
    return dp[m][n]


def is_close_match(text: str, target: str) -> bool:
    a = normalize(text)
    b = normalize(target)
    if a == b:
        return True
    return edit_distance(a, b) <= MAX_TYPO_DISTANCE


def contains_normalized(haystack: str, needle: str) -> bool:
    """Case/diacritic-insensitive substring test used for company lookups."""
    q = normalize(needle)
    if not q:
        return False
    return q in normalize(haystack)
