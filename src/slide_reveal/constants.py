"""Global constants for the application."""

# Backend spatial contract
PT_TO_EMU = 12700  # English Metric Units per typographic point

# Request batching
MAX_BATCH_SIZE = 50  # Requests per batchUpdate call for non-frame request lists

# Text box defaults
FONT_FAMILY = "Arial"
LINE_SPACING = 115  # Percent
PARAGRAPH_ALIGNMENT = "START"
TEXT_STYLE_FIELDS = "fontFamily,fontSize,foregroundColor,bold"

# Matrix glyphs (half-width katakana)
MATRIX_CHARS = "ｦｧｨｩｪｫｬｭｮｯｰｱｲｳｴｵｶｷｸｹｺｻｼｽｾｿﾀﾁﾂﾃﾄﾅﾆﾇﾈﾉﾊﾋﾌﾍﾎﾏﾐﾑﾒﾓﾔﾕﾖﾗﾘﾙﾚﾛﾜﾝ"
PRESERVE_CHARS = frozenset(".,!?:;-'\"()[]")

# Rain timing tables, indexed by drop index modulo table length
RAIN_START_OFFSETS = (50, 100, 75)  # Points above the text row each drop starts
RAIN_FADE_STEPS = (3, 5, 4)  # Frames for a drop to fade out after deposit
RAIN_FADE_IN_STEPS = (1, 3, 2)  # Frames for a drop to fade in while falling
TEXT_FADE_STEPS = (4, 7, 5)  # Frames for a deposited character to fade in

RAIN_Y_STEP = 25  # Points each drop falls per frame
RAIN_TAIL_FRAMES = 5  # Frames for text to settle after the last deposit
RAIN_DROP_SIZE = 30  # Drop text box width and height in points

# Layout approximations for Arial
CHAR_WIDTH_RATIO = 0.48  # Character width / font size
TEXT_BOX_PADDING_X = 7.2  # Text box internal left inset in points

PRESENTATION_URL_TEMPLATE = "https://docs.google.com/presentation/d/{presentation_id}/edit"
