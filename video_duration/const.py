# Box type codes
MOOV = b"moov"  # Movie metadata container
MVHD = b"mvhd"  # Movie header

# The box path walked to reach the movie header
MOVIE_HEADER_PATH = (MOOV, MVHD)

# size(4) + type(4)
BOX_HEADER_SIZE = 8
# size(4) + type(4) + largesize(8)
EXTENDED_BOX_HEADER_SIZE = 16

NANOS_PER_SECOND = 1_000_000_000
