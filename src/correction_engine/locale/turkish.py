"""Turkish rules: the engine's default locale."""

from __future__ import annotations

from correction_engine.locale.rules import LocaleRules

STOPWORDS = frozenset(
    {
        "ve", "bir", "ile", "ben", "sen", "biz", "siz", "bu", "su", "o",
        "da", "de", "mi", "mu", "mü", "ki", "ama", "var", "yok", "ne",
        "hem", "her", "ise", "icin", "gibi", "kadar", "daha", "en",
        "cok", "az", "tam", "tum", "hep", "hic", "sey", "diye",
        "bana", "sana", "ona", "beni", "seni", "onu",
        "oldu", "olan", "olur", "etti", "eden", "eder",
        "dedi", "diyor", "der", "geldi", "gitti",
        "bunu", "sunu", "neden", "nasil", "nere",
    }
)

# Plural, case, possessive and common verbal endings, vowel-harmony variants
# listed together. Sorted longest first at module load.
_SUFFIXES = [
    "lerinden", "larından", "lerinde", "larında", "lerine", "larına",
    "lerini", "larını", "lerin", "ların", "leri", "ları", "ler", "lar",
    "iyorum", "ıyorum", "uyorum", "üyorum", "iyor", "ıyor", "uyor", "üyor",
    "acak", "ecek", "mış", "miş", "muş", "müş",
    "ndan", "nden", "ında", "inde", "unda", "ünde",
    "nın", "nin", "nun", "nün",
    "dan", "den", "tan", "ten",
    "lık", "lik", "luk", "lük",
    "dır", "dir", "dur", "dür",
    "da", "de", "ta", "te",
    "ın", "in", "un", "ün",
    "yı", "yi", "yu", "yü", "ya", "ye",
    "sı", "si", "su", "sü",
]
SUFFIXES = tuple(sorted(set(_SUFFIXES), key=len, reverse=True))

# Dangerous or ambiguous short words ("on" 10/ön, "ol" olmak/ölmek,
# "us", "dis" diş/dış) are intentionally absent.
CHAR_FIXES = (
    ("guc", "güç"),
    ("gul", "gül"),
    ("goz", "göz"),
    ("suc", "suç"),
    ("tum", "tüm"),
    ("uc", "üç"),
    ("ic", "iç"),
    ("soz", "söz"),
    ("yuz", "yüz"),
    ("duz", "düz"),
    ("bos", "boş"),
    ("tas", "taş"),
    ("bas", "baş"),
    ("yas", "yaş"),
    ("kis", "kış"),
    ("kus", "kuş"),
)

WORD_CORRECTIONS = (
    # Verb roots and inflections
    ("degil", "değil"),
    ("degilim", "değilim"),
    ("degilsin", "değilsin"),
    ("degiliz", "değiliz"),
    ("oyle", "öyle"),
    ("boyle", "böyle"),
    ("soyle", "söyle"),
    ("soylemek", "söylemek"),
    ("soyluyorum", "söylüyorum"),
    ("soyledi", "söyledi"),
    ("gormek", "görmek"),
    ("gordum", "gördüm"),
    ("goruyor", "görüyor"),
    ("goruyorum", "görüyorum"),
    ("gorus", "görüş"),
    ("gorusmek", "görüşmek"),
    ("gorusuruz", "görüşürüz"),
    ("gorusme", "görüşme"),
    ("dusun", "düşün"),
    ("dusunmek", "düşünmek"),
    ("dusunuyorum", "düşünüyorum"),
    ("dusundugum", "düşündüğüm"),
    ("dusunce", "düşünce"),
    ("gelmis", "gelmiş"),
    ("gitmis", "gitmiş"),
    ("yapmis", "yapmış"),
    ("yapiyorum", "yapıyorum"),
    ("etmis", "etmiş"),
    ("olmis", "olmuş"),
    ("olmus", "olmuş"),
    ("vermis", "vermiş"),
    ("almis", "almış"),
    ("aliyor", "alıyor"),
    ("bilmis", "bilmiş"),
    ("koymus", "koymuş"),
    ("gecmis", "geçmiş"),
    ("gecmek", "geçmek"),
    ("geciyor", "geçiyor"),
    ("baslamis", "başlamış"),
    ("baslamak", "başlamak"),
    ("basliyor", "başlıyor"),
    ("calisma", "çalışma"),
    ("calismak", "çalışmak"),
    ("calisiyorum", "çalışıyorum"),
    ("calisiyor", "çalışıyor"),
    ("calistim", "çalıştım"),
    ("ogrenmek", "öğrenmek"),
    ("ogrendim", "öğrendim"),
    ("ogreniyor", "öğreniyor"),
    # Common nouns
    ("tesekkur", "teşekkür"),
    ("tesekkurler", "teşekkürler"),
    ("musteri", "müşteri"),
    ("musteriler", "müşteriler"),
    ("ogrenci", "öğrenci"),
    ("ogrenciler", "öğrenciler"),
    ("ogretmen", "öğretmen"),
    ("ogretmenler", "öğretmenler"),
    ("goruntuleme", "görüntüleme"),
    ("dunya", "dünya"),
    ("dunyanin", "dünyanın"),
    ("urun", "ürün"),
    ("urunler", "ürünler"),
    ("uretim", "üretim"),
    ("surec", "süreç"),
    ("surecler", "süreçler"),
    ("iletisim", "iletişim"),
    ("gelisim", "gelişim"),
    ("gelistirme", "geliştirme"),
    ("gelistirmek", "geliştirmek"),
    ("yonetim", "yönetim"),
    ("yonetici", "yönetici"),
    ("yoneticiler", "yöneticiler"),
    ("donus", "dönüş"),
    ("donusum", "dönüşüm"),
    ("disari", "dışarı"),
    ("icin", "için"),
    ("gercek", "gerçek"),
    ("gercekten", "gerçekten"),
    ("gerceklestirilmek", "gerçekleştirilmek"),
    ("ozur", "özür"),
    ("lutfen", "lütfen"),
    ("gunluk", "günlük"),
    ("gozluk", "gözlük"),
    ("universite", "üniversite"),
    ("universitelerin", "üniversitelerin"),
    ("kutuphane", "kütüphane"),
    ("kultur", "kültür"),
    ("kulturel", "kültürel"),
    ("mulk", "mülk"),
    ("mulkiyet", "mülkiyet"),
    # Adjectives and adverbs
    ("guzel", "güzel"),
    ("onemli", "önemli"),
    ("onemi", "önemi"),
    ("ozel", "özel"),
    ("ozgur", "özgür"),
    ("ozgurluk", "özgürlük"),
    ("guclu", "güçlü"),
    ("gucsuz", "güçsüz"),
    ("buyuk", "büyük"),
    ("buyukler", "büyükler"),
    ("kucuk", "küçük"),
    ("kucukler", "küçükler"),
    ("yuksek", "yüksek"),
    ("dusuk", "düşük"),
    ("mumkun", "mümkün"),
    ("mumkunse", "mümkünse"),
    ("basarili", "başarılı"),
    ("basariyla", "başarıyla"),
    ("olaganustu", "olağanüstü"),
    ("mukemmel", "mükemmel"),
    # Conjunctions and postpositions
    ("cunki", "çünkü"),
    ("cunku", "çünkü"),
    ("yuzunden", "yüzünden"),
    ("uzerine", "üzerine"),
    ("uzerinde", "üzerinde"),
    ("uzerinden", "üzerinden"),
    ("ustunde", "üstünde"),
    ("ustune", "üstüne"),
    ("dolayi", "dolayı"),
    ("dolayisiyla", "dolayısıyla"),
    ("oturu", "ötürü"),
    # Proper nouns
    ("turkce", "Türkçe"),
    ("turkiye", "Türkiye"),
    ("istanbul", "İstanbul"),
    ("ankara", "Ankara"),
    ("izmir", "İzmir"),
    ("antalya", "Antalya"),
    # Frequent recognizer misses
    ("cok", "çok"),
    ("isin", "işin"),
    ("isler", "işler"),
    ("islem", "işlem"),
    ("islemler", "işlemler"),
    ("kalca", "kalça"),
    ("sayi", "sayı"),
    ("sayilar", "sayılar"),
    ("cozum", "çözüm"),
    ("cozumler", "çözümler"),
    ("cozmek", "çözmek"),
    ("cesit", "çeşit"),
    ("cesitli", "çeşitli"),
    ("ceviri", "çeviri"),
    ("cevre", "çevre"),
    ("cevresinde", "çevresinde"),
    ("sicak", "sıcak"),
    ("soguk", "soğuk"),
    ("komsuluk", "komşuluk"),
    ("dusman", "düşman"),
)

# English words common in Turkish speech; never rewritten
LOANWORDS = frozenset(
    {
        # Technology and work
        "meeting", "project", "deadline", "email", "mail", "feature",
        "bug", "fix", "update", "release", "deploy", "server", "client",
        "database", "cloud", "app", "software", "hardware", "network",
        "online", "offline", "laptop", "desktop", "mobile", "tablet",
        "startup", "feedback", "design", "developer", "manager", "team",
        "sprint", "scrum", "agile", "backend", "frontend", "fullstack",
        "api", "url", "link", "click", "login", "logout", "signup",
        "password", "username", "admin", "dashboard", "report", "status",
        "live", "stream", "video", "audio", "podcast", "blog", "post",
        "comment", "share", "like", "follow", "subscribe", "content",
        "marketing", "brand", "target", "budget", "plan", "strategy",
        "performance", "data", "analytics", "insight", "trend", "growth",
        "slide", "presentation", "demo", "pitch", "brief", "scope",
        "task", "issue", "ticket", "board", "workflow", "pipeline",
        "push", "pull", "merge", "commit", "branch", "repository",
        "test", "debug", "log", "error", "warning", "crash", "build",
        "run", "stop", "start", "reset", "setup", "config", "setting",
        "file", "folder", "drive", "storage", "backup", "restore",
        "install", "download", "upload", "import", "export",
        "zoom", "slack", "teams", "discord", "notion", "figma",
        "google", "microsoft", "apple", "amazon", "meta", "twitter",
        "youtube", "instagram", "whatsapp", "telegram", "linkedin",
        "react", "node", "python", "java", "rust", "docker", "linux",
        # Everyday
        "gun", "ok", "cool", "nice", "super", "top", "best", "good",
        "great", "perfect", "awesome", "amazing", "excellent",
        "sorry", "thanks", "thank", "please", "hello", "hi", "bye",
        "yes", "no", "maybe", "sure", "right", "left",
        "black", "white", "blue", "red", "green", "pink", "gold",
        "big", "small", "fast", "slow", "new", "old", "hot", "cold",
        "time", "date", "day", "week", "month", "year",
        "shop", "store", "market", "mall", "cafe", "restaurant",
        "fitness", "gym", "spa", "yoga", "diet", "vegan",
        "style", "fashion", "look", "show", "event", "party",
        "check", "list", "note", "pin", "tag", "label",
    }
)

NUMBER_WORDS = {
    0: "sıfır",
    1: "bir",
    2: "iki",
    3: "üç",
    4: "dört",
    5: "beş",
    6: "altı",
    7: "yedi",
    8: "sekiz",
    9: "dokuz",
    10: "on",
    20: "yirmi",
    30: "otuz",
    40: "kırk",
    50: "elli",
    60: "altmış",
    70: "yetmiş",
    80: "seksen",
    90: "doksan",
    100: "yüz",
}

UNIT_WORDS = (
    "lira", "tl", "dolar", "euro", "sterlin", "kuruş",
    "kilo", "kilogram", "kg", "gram", "gr", "ton",
    "metre", "meter", "km", "cm", "mm", "mil",
    "litre", "lt",
    "saat", "dakika", "saniye",
    "gün", "ay", "yıl", "yılında", "yılı",
    "kişi", "kez", "defa", "adet", "tane",
    "%", "derece",
    "milyon", "milyar", "bin",
)

QUESTION_SUFFIXES = frozenset(
    {
        "mi", "mı", "mu", "mü",
        "mısın", "misin", "musun", "müsün",
        "miyiz", "mıyız", "muyuz", "müyüz",
        "mısınız", "misiniz", "musunuz", "müsünüz",
        "mudur", "müdür", "midir", "mıdır",
        "değilmi", "değilmı", "olurmu", "olmuzmu",
        "edermi", "yaparmi", "gelirmi", "gidermi",
    }
)

QUESTION_WORDS = frozenset(
    {
        "ne", "neden", "nasıl", "nereye", "nerede", "nereden",
        "kim", "kime", "kimi", "kimin",
        "niçin", "niye", "hangi", "kaç",
        "acaba", "yoksa", "hani", "peki",
    }
)

EXCLAMATION_WORDS = frozenset(
    {
        "eyvah", "aman", "haydi", "bravo", "maşallah",
        "vay", "yuh", "hadi", "aferin",
        "ay", "of", "oha", "aaa", "tüh", "yaşa", "helal",
        "harika", "muhteşem", "süper", "mükemmel", "allah",
        "evet", "tabii", "kesinlikle", "olsun",
    }
)

COMMA_WORDS = (
    "ama", "fakat", "ancak", "çünkü", "yani", "ayrıca",
    "örneğin", "mesela", "dolayısıyla", "üstelik", "halbuki",
    "oysa", "oysaki", "lakin", "nitekim", "zira",
    "dahası",
)

COMMA_PHRASES = (
    "bununla birlikte", "ne var ki", "öte yandan",
    "buna rağmen", "bunun yanında",
)

SPLIT_MARKERS = (
    " ve ", " sonra ", " ardından ", " daha sonra ",
    " ondan sonra ", " bundan sonra ", " ayrıca ",
    " ancak ", " fakat ", " ama ",
)

DOMAIN_KEYWORDS = {
    "technical": (
        "api", "server", "deploy", "bug", "commit", "frontend", "backend",
        "database", "kod", "yazılım", "program", "fonksiyon", "değişken", "class", "git",
    ),
    "medical": (
        "hasta", "tedavi", "ilaç", "doktor", "ameliyat", "teşhis",
        "reçete", "hastane", "klinik", "semptom", "muayene", "tansiyon",
    ),
    "legal": (
        "mahkeme", "dava", "avukat", "kanun", "hukuk", "savcı",
        "hakim", "sözleşme", "madde", "ihlal", "karar", "temyiz",
    ),
    "business": (
        "toplantı", "proje", "rapor", "müşteri", "satış",
        "pazarlama", "bütçe", "strateji", "hedef", "performans", "yönetim",
    ),
}

TURKISH = LocaleRules(
    code="tr",
    stopwords=STOPWORDS,
    suffixes=SUFFIXES,
    char_fixes=CHAR_FIXES,
    word_corrections=WORD_CORRECTIONS,
    loanwords=LOANWORDS,
    number_words=NUMBER_WORDS,
    unit_words=UNIT_WORDS,
    question_suffixes=QUESTION_SUFFIXES,
    question_words=QUESTION_WORDS,
    exclamation_words=EXCLAMATION_WORDS,
    comma_words=COMMA_WORDS,
    comma_phrases=COMMA_PHRASES,
    split_markers=SPLIT_MARKERS,
    domain_keywords=DOMAIN_KEYWORDS,
    dotted_i=True,
)
