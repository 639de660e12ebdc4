from typing import Dict, List, Optional
import binascii


class MagicNumbers:
    # File signatures recognisable in decoded payloads
    MAGIC_NUMBERS = {
        'PNG': {
            'header': '89504E470D0A1A0A',
            'description': 'PNG image'
        },
        'JPEG': {
            'header': 'FFD8FF',
            'description': 'JPEG image'
        },
        'GIF87a': {
            'header': '474946383761',
            'description': 'GIF87a image'
        },
        'GIF89a': {
            'header': '474946383961',
            'description': 'GIF89a image'
        },
        'PDF': {
            'header': '255044462D',
            'description': 'PDF document'
        },
        'ZIP': {
            'header': '504B0304',
            'description': 'ZIP archive'
        },
        'RAR': {
            'header': '526172211A07',
            'description': 'RAR archive'
        },
        '7Z': {
            'header': '377ABCAF271C',
            'description': '7-Zip archive'
        },
        'GZIP': {
            'header': '1F8B08',
            'description': 'GZIP stream'
        },
        'BZIP2': {
            'header': '425A68',
            'description': 'BZIP2 stream'
        },
        'ELF': {
            'header': '7F454C46',
            'description': 'ELF executable'
        },
        'CLASS': {
            'header': 'CAFEBABE',
            'description': 'Java class file'
        },
        'DOC': {
            'header': 'D0CF11E0A1B11AE1',
            'description': 'MS Office document'
        },
        'MP3': {
            'header': '494433',
            'description': 'MP3 audio (ID3)'
        },
        'MP4': {
            'header': '66747970',
            'offset': 4,
            'description': 'MP4 video'
        },
        'RIFF': {
            'header': '52494646',
            'description': 'RIFF container (WAV/AVI/WebP)'
        },
        'ZLIB': {
            'header': '789C',
            'description': 'zlib stream'
        },
    }

    @classmethod
    def detect_format(cls, data: bytes) -> List[Dict[str, str]]:
        """Detect formats whose magic number matches data"""
        hex_data = binascii.hexlify(data).decode('ascii').upper()
        matches = []

        for format_name, format_info in cls.MAGIC_NUMBERS.items():
            start = format_info.get('offset', 0) * 2
            if hex_data.startswith(format_info['header'], start):
                matches.append({
                    'format': format_name,
                    'description': format_info['description'],
                    'header': format_info['header'],
                })

        return matches

    @classmethod
    def describe(cls, data: bytes) -> Optional[str]:
        """Description of the first matching format, if any"""
        matches = cls.detect_format(data)
        return matches[0]['description'] if matches else None
