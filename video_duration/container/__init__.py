"""
ISO base media container parsing.

Pure Python, struct-based reading of MP4/MOV files. No FFmpeg dependency.

- box_scanner: seek-based walk over the box tree (never buffers skipped boxes)
- movie_header: version-aware mvhd decoder (timescale and duration)
"""
