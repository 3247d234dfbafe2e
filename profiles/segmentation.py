"""
Split a domain label into words: 'bestcoffeeguide' -> ['best', 'coffee', 'guide'].
"""

COMMON_WORDS = {
    "the", "best", "top", "my", "your", "our", "get", "go", "buy", "shop", "store",
    "online", "web", "net", "site", "hub", "zone", "spot", "world", "land", "city",
    "home", "house", "garden", "kitchen", "food", "recipe", "recipes", "cook", "coffee",
    "tea", "wine", "beer", "bar", "cafe", "health", "fit", "fitness", "yoga", "diet",
    "life", "style", "living", "love", "baby", "kids", "mom", "dad", "family", "pet",
    "pets", "dog", "dogs", "cat", "cats", "travel", "trip", "tour", "tours", "guide",
    "guides", "tips", "tricks", "news", "daily", "blog", "review", "reviews", "tech",
    "digital", "data", "cloud", "app", "apps", "game", "games", "play", "sport", "sports",
    "golf", "bike", "car", "cars", "auto", "money", "cash", "pay", "bank", "finance",
    "invest", "crypto", "trade", "market", "job", "jobs", "work", "career", "school",
    "learn", "study", "book", "books", "art", "music", "photo", "film", "movie", "green",
    "eco", "solar", "energy", "water", "smart", "easy", "fast", "free", "pro", "plus",
    "hq", "lab", "labs", "studio", "design", "media", "group", "team", "club", "center",
    "central", "direct", "express", "first", "new", "big", "little", "good", "happy",
    "fresh", "pure", "real", "true", "local", "global", "fashion", "beauty", "skin",
    "hair", "wedding", "party", "gift", "gifts", "deal", "deals", "sale", "outdoor",
    "camp", "fish", "fishing", "hunt", "farm", "tool", "tools", "repair", "build",
    "craft", "wood", "paint", "clean", "care", "dental", "doctor", "law", "legal",
}

MAX_WORD_LENGTH = max(len(w) for w in COMMON_WORDS)


def segment(label: str) -> list[str]:
    """
    Words in a domain label.

    Hyphens split directly. Otherwise a DP over COMMON_WORDS picks the split
    with the fewest unknown characters; unknown runs stay as one chunk.
    """
    label = label.lower().strip()
    if not label:
        return []
    if "-" in label:
        return [part for part in label.split("-") if part]

    n = len(label)
    # best[i] = (unknown chars, word count, words) for label[:i]
    best: list = [(0, 0, [])] + [None] * n
    for i in range(1, n + 1):
        for j in range(max(0, i - MAX_WORD_LENGTH), i):
            if best[j] is None:
                continue
            piece = label[j:i]
            unknown, count, words = best[j]
            if piece in COMMON_WORDS:
                candidate = (unknown, count + 1, words + [piece])
            else:
                # Extend a trailing unknown chunk instead of starting a new one
                if words and words[-1] not in COMMON_WORDS:
                    candidate = (unknown + len(piece), count, words[:-1] + [words[-1] + piece])
                else:
                    candidate = (unknown + len(piece), count + 1, words + [piece])
            if best[i] is None or candidate[:2] < best[i][:2]:
                best[i] = candidate
    return best[n][2]


def segment_domain(name: str) -> list[str]:
    """Words in a full domain name (TLD ignored)."""
    label = name.lower().rsplit(".", 1)[0] if "." in name else name.lower()
    if label.startswith("www."):
        label = label[4:]
    return segment(label.replace(".", "-"))
