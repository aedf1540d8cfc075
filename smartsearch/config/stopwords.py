"""
Stop-word lists for keyword extraction.

Covers English, French and Arabic. Short acronyms listed in
IMPORTANT_SHORT_WORDS survive the minimum-length filter.
"""

ENGLISH_STOP_WORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "be", "been",
    "have", "has", "had", "do", "does", "did", "will", "would", "should", "could",
    "may", "might", "must", "can", "this", "that", "these", "those", "it", "its",
    "i", "you", "he", "she", "we", "they", "my", "your", "his", "her", "our", "their",
    "what", "which", "who", "when", "where", "why", "how", "about", "up", "out",
    "if", "then", "than", "so", "no", "not", "only", "own", "same", "such", "here",
    "there", "each", "few", "more", "most", "other", "some", "time", "very",
    "said", "get", "make", "go", "see", "know", "take", "think", "come", "give",
    "look", "use", "find", "tell", "ask", "work", "seem", "feel", "try", "leave",
})

FRENCH_STOP_WORDS: frozenset[str] = frozenset({
    # Articles
    "le", "la", "les", "un", "une", "des", "du", "de", "d", "l",
    # Prepositions
    "dans", "pour", "avec", "sur", "sous", "entre", "vers", "chez", "sans", "par",
    "avant", "après", "pendant", "depuis", "jusqu", "contre", "selon", "malgré",
    # Pronouns
    "je", "tu", "il", "elle", "nous", "vous", "ils", "elles", "me", "te", "se",
    "lui", "leur", "en", "y", "qui", "que", "quoi", "dont", "où", "ce", "cela",
    "ça", "ceci", "celui", "celle", "ceux", "celles", "lequel", "laquelle",
    # Verbs
    "est", "sont", "était", "étaient", "être", "avoir", "as", "a", "avons",
    "avez", "ont", "avait", "avaient", "sera", "seront", "serait", "seraient",
    "fait", "faire", "dit", "dire", "va", "aller", "peut", "pouvoir", "doit", "devoir",
    # Conjunctions and adverbs
    "et", "ou", "mais", "donc", "car", "ni", "soit", "alors", "ainsi", "aussi",
    "bien", "encore", "déjà", "jamais", "toujours", "souvent", "parfois", "très",
    "plus", "moins", "beaucoup", "peu", "assez", "trop", "tout", "tous", "toute", "toutes",
    # Others
    "si", "oui", "non", "ne", "pas", "point", "rien", "personne", "aucun", "aucune",
    "chaque", "chacun", "chacune", "autre", "autres", "même", "mêmes", "tel", "telle",
    "mes", "comment",
})

ARABIC_STOP_WORDS: frozenset[str] = frozenset({
    # Particles
    "ال", "في", "من", "إلى", "على", "عن", "مع", "بعد", "قبل", "تحت", "فوق", "أمام", "خلف",
    "بين", "ضد", "حول", "خلال", "عبر", "نحو", "لدى", "عند", "غير", "سوى", "إلا",
    # Pronouns
    "أنا", "أنت", "أنتم", "أنتن", "هو", "هي", "هم", "هن", "نحن", "إياي", "إياك", "إياه", "إياها",
    "إيانا", "إياكم", "إياكن", "إياهم", "إياهن", "هذا", "هذه", "ذلك", "تلك", "هؤلاء", "أولئك",
    "ما", "التي", "الذي", "اللذان", "اللتان", "الذين", "اللاتي", "اللواتي",
    # Auxiliary verbs
    "كان", "كانت", "كانوا", "كن", "يكون", "تكون", "أكون", "نكون", "تكونوا", "يكن",
    "ليس", "ليست", "لسنا", "لست", "لسن", "لسوا", "صار", "صارت", "أصبح", "أصبحت",
    "بات", "باتت", "ظل", "ظلت", "مازال", "مازالت", "لايزال", "لاتزال",
    # Conjunctions
    "و", "أو", "لكن", "إذا", "إذ", "حيث", "بينما", "كما", "مثل", "كأن", "لأن", "حتى",
    "لو", "لولا", "لوما", "كي", "لكي", "إن", "أن", "ليت", "لعل", "عسى",
    # Prepositions and particles
    "ب", "ل", "ك", "س", "ف", "قد", "لقد", "لم", "لن", "لا",
    "بل", "نعم", "كلا", "أجل", "حقا", "فعلا", "طبعا", "أيضا", "كذلك", "هكذا", "هنا", "هناك",
    "هنالك", "أين", "كيف", "متى", "لماذا", "ماذا", "أي", "أية", "كم", "كأين",
    # Common words
    "كل", "بعض", "جميع", "معظم", "أكثر", "أقل", "أول", "آخر", "نفس", "ذات",
    "فقط", "منذ", "مذ", "خاصة", "عامة",
})

IMPORTANT_SHORT_WORDS: frozenset[str] = frozenset({
    # Technical acronyms
    "ai", "ml", "it", "ui", "ux", "ar", "vr", "3d", "2d", "io", "os", "db", "id",
    "api", "url", "css", "js", "php", "sql", "xml", "json", "http", "ftp", "ssh",
    "aws", "gcp", "cdn", "seo", "crm", "erp", "bi", "ci", "cd", "qa", "dev", "ops",
    # Common abbreviations
    "usa", "uk", "eu", "uae", "ksa", "gcc", "mena", "ceo", "cto", "cfo", "hr", "pr",
})

STOP_WORDS: frozenset[str] = ENGLISH_STOP_WORDS | FRENCH_STOP_WORDS | ARABIC_STOP_WORDS


def is_stop_word(word: str | None) -> bool:
    """Blank input counts as a stop word."""
    if word is None or not word.strip():
        return True
    return word.strip().lower() in STOP_WORDS


def is_important_short_word(word: str | None) -> bool:
    if word is None or not word.strip():
        return False
    return word.strip().lower() in IMPORTANT_SHORT_WORDS
