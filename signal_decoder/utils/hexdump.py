def hexdump(data: bytes, bytes_per_line: int = 16) -> str:
    """Classic offset / hex / |ascii| dump of data"""
    if bytes_per_line < 1:
        raise ValueError("bytes_per_line must be positive")

    half = (bytes_per_line + 1) // 2
    lines = []
    for i in range(0, len(data), bytes_per_line):
        line = f"{i:08x}: "

        chunk = data[i:i + bytes_per_line]
        hex_values = [f"{b:02x}" for b in chunk]

        # Pad short final line so the ascii gutter lines up
        if len(hex_values) < bytes_per_line:
            hex_values.extend(['  '] * (bytes_per_line - len(hex_values)))

        # Two groups, split in the middle of the line
        line += ' '.join(hex_values[:half]) + '  ' + ' '.join(hex_values[half:])

        ascii_part = ''.join(chr(b) if 32 <= b <= 126 else '.' for b in chunk)
        line += f"  |{ascii_part}|"

        lines.append(line)

    return '\n'.join(lines)
