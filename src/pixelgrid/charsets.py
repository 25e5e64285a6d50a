# Symbols handed out to palette entries, in assignment order
SYMBOLS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789!@#$%^&*()_+=[]{}|;':,/<"

# Reserved: transparent pixels, and palette entries past the end of SYMBOLS
TRANSPARENT = "."
OVERFLOW = "?"

# Pixels with alpha below this are rendered as TRANSPARENT
ALPHA_THRESHOLD = 128
