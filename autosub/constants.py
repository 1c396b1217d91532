cloudflare_cache_headers = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': '*',
    'Cache-Control': 'no-cache, no-store, must-revalidate',
    'Pragma': 'no-cache',
    'Expires': '0',
    'Surrogate-Control': 'no-store'
}

OUTPUT_MODE_BEST = "best"
OUTPUT_MODE_TOP3 = "top3"

# Results returned per output mode
OUTPUT_CARDINALITY = {
    OUTPUT_MODE_BEST: 1,
    OUTPUT_MODE_TOP3: 3,
}

ENGLISH_ALIAS = "en"

ORIGIN_PRIMARY = "primary"
ORIGIN_SECONDARY = "secondary"
ORIGIN_UNKNOWN = "unknown"

# Substring of the source URL -> origin tag
ORIGIN_MARKERS = (
    ("opensub", ORIGIN_PRIMARY),
    ("subdl", ORIGIN_SECONDARY),
)

# Flat catalogue used by the single-winner addon
FLAT_RELEASE_TAGS = ('bluray', 'brrip', 'web-dl', 'webrip', 'web', 'hdrip', 'dvdrip', 'cam', 'ts', 'tc')

RELEASE_TYPE_GROUPS = {
    "bluray": ("bluray", "blu-ray", "brrip", "bdrip", "bdremux", "remux", "bd25", "bd50"),
    "web": ("web-dl", "webdl", "webrip", "web-rip", "web"),
    "dvd": ("dvdrip", "dvdscr", "dvd5", "dvd9", "dvd"),
    "hdtv": ("hdtv", "pdtv", "hdrip"),
    "cam": ("hdcam", "cam", "camrip", "hdts", "telesync", "ts", "telecine", "tc"),
}

RELEASE_GROUP_TOKENS = (
    "yify", "yts", "rarbg", "sparks", "geckos", "fgt", "evo", "ettv", "eztv",
    "ntb", "ntg", "flux", "cmrg", "tigole", "qxr", "psa", "galaxyrg", "ion10",
    "amiable", "drones", "blow", "lol", "killers", "framestor", "epsilon",
    "x264", "x265", "h264", "h265", "hevc", "avc", "10bit", "hdr", "dv",
    "amzn", "nf", "dsnp", "hmax", "atvp", "hulu",
)

FRAME_RATE_LITERALS = ("23.976", "23.98", "24.000", "25.000", "29.970", "30.000", "50.000", "59.940")

HEARING_IMPAIRED_MARKERS = ("sdh", "impaired")
MACHINE_TRANSLATION_MARKERS = ("machine", "translated")
