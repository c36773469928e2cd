"""Three-colour palettes (core, mid, deep) keyed by character."""

CHARACTER_PALETTES = {
    "A": ("#FF4444", "#CC2222", "#881111"), "B": ("#00D9B5", "#009E7F", "#006B55"),
    "C": ("#00B4D8", "#0077B6", "#004D73"), "D": ("#2DD4BF", "#0D9488", "#065F5B"),
    "E": ("#FBBF24", "#D97706", "#92400E"), "F": ("#E879F9", "#C026D3", "#7E22CE"),
    "G": ("#34D399", "#059669", "#065F46"), "H": ("#FCD34D", "#F59E0B", "#B45309"),
    "I": ("#A78BFA", "#7C3AED", "#5B21B6"), "J": ("#38BDF8", "#0284C7", "#075985"),
    "K": ("#FB923C", "#EA580C", "#9A3412"), "L": ("#4ADE80", "#16A34A", "#166534"),
    "M": ("#F87171", "#DC2626", "#991B1B"), "N": ("#94A3B8", "#64748B", "#475569"),
    "O": ("#2DD4BF", "#14B8A6", "#0F766E"), "P": ("#FB7185", "#E11D48", "#9F1239"),
    "Q": ("#C084FC", "#9333EA", "#6B21A8"), "R": ("#60A5FA", "#2563EB", "#1E40AF"),
    "S": ("#5EEAD4", "#14B8A6", "#0D9488"), "T": ("#FDE047", "#EAB308", "#A16207"),
    "U": ("#F472B6", "#DB2777", "#9D174D"), "V": ("#7DD3FC", "#0EA5E9", "#0369A1"),
    "W": ("#6EE7B7", "#10B981", "#047857"), "X": ("#FEF08A", "#FACC15", "#CA8A04"),
    "Y": ("#D8B4FE", "#A855F7", "#7E22CE"), "Z": ("#93C5FD", "#3B82F6", "#1D4ED8"),
    "0": ("#FF7849", "#EA580C", "#C2410C"), "1": ("#FF5722", "#D84315", "#BF360C"),
    "2": ("#00BCD4", "#0097A7", "#00838F"), "3": ("#00E676", "#00C853", "#00A044"),
    "4": ("#7C4DFF", "#651FFF", "#4A148C"), "5": ("#FF4081", "#F50057", "#C51162"),
    "6": ("#448AFF", "#2979FF", "#2962FF"), "7": ("#E040FB", "#D500F9", "#AA00FF"),
    "8": ("#00E676", "#00C853", "#009624"), "9": ("#FF4081", "#F50057", "#AD1457"),
    "@": ("#7C4DFF", "#536DFE", "#3D5AFE"), ".": ("#E040FB", "#AA00FF", "#7B1FA2"),
    "_": ("#00BFA5", "#00897B", "#00695C"), "-": ("#FF6E40", "#FF3D00", "#DD2C00"),
    "+": ("#69F0AE", "#00E676", "#00C853"),
}

FALLBACK_PALETTE = ("#8B5CF6", "#7C3AED", "#5B21B6")


def palette_for(char):
    return CHARACTER_PALETTES.get((char or "").upper(), FALLBACK_PALETTE)


def hsl_to_hex(hue, saturation, lightness):
    """Convert HSL (degrees, 0-100, 0-100) into '#RRGGBB'."""
    h = (hue % 360) / 360.0
    s = saturation / 100.0
    l = lightness / 100.0

    def channel(n):
        k = (n + h * 12) % 12
        a = s * min(l, 1 - l)
        return l - a * max(-1.0, min(k - 3, 9 - k, 1.0))

    r, g, b = (int(round(channel(n) * 255)) for n in (0, 8, 4))
    return f"#{r:02X}{g:02X}{b:02X}"
