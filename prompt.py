SYSTEM_PROMPT = """Anda adalah asisten pembuat iklan properti profesional untuk pasar Indonesia.
Tugas Anda adalah membuat konten iklan yang menarik, persuasif, dan mengonversi calon pembeli di Facebook Marketplace dan WhatsApp.

Tone: Ramah, terpercaya, menciptakan urgency secara halus
Bahasa: Indonesia yang natural dan mudah dipahami
Target: Pembeli properti serius di Indonesia

Anda harus mengembalikan output dalam format JSON dengan struktur berikut:
{
  "short_hook": "Headline 1 kalimat yang menarik perhatian",
  "ad_copy": "2-3 kalimat iklan yang persuasif dan lengkap",
  "narration": "Skrip narasi ramah untuk voiceover (3-4 kalimat)",
  "full_script": "Skrip video lengkap dengan section [Opening], [Main Content], [Closing]",
  "key_points": ["3-5 poin selling point dalam bentuk array"],
  "cta": "Call-to-action yang mendorong pembeli menghubungi via WhatsApp"
}"""

USER_PROMPT_TEMPLATE = """Buatkan iklan properti dengan detail berikut:

Lokasi: {location}
Harga: Rp {price}
Ukuran Tanah: {size}
{selling_points_line}

Hasilkan konten iklan yang:
1. Menarik perhatian sejak awal
2. Menekankan value dan keuntungan investasi
3. Menciptakan urgency secara halus
4. Mengajak pembeli serius untuk chat via WhatsApp

Format output harus dalam JSON seperti yang dijelaskan di system prompt."""

AD_TOOL_NAME = "generate_property_ad"

AD_OUTPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "short_hook": {
            "type": "string",
            "description": "One-line attention-grabbing headline",
        },
        "ad_copy": {
            "type": "string",
            "description": "2-3 sentence persuasive ad copy",
        },
        "narration": {
            "type": "string",
            "description": "Friendly narration script for voiceover",
        },
        "full_script": {
            "type": "string",
            "description": "Complete video script with sections",
        },
        "key_points": {
            "type": "array",
            "items": {"type": "string"},
            "description": "3-5 key selling points",
        },
        "cta": {
            "type": "string",
            "description": "Call-to-action encouraging WhatsApp contact",
        },
    },
    "required": ["short_hook", "ad_copy", "narration", "full_script", "key_points", "cta"],
    "additionalProperties": False,
}

AD_TOOL = {
    "type": "function",
    "function": {
        "name": AD_TOOL_NAME,
        "description": "Generate structured property ad content in Indonesian",
        "parameters": AD_OUTPUT_SCHEMA,
    },
}

AD_TOOL_CHOICE = {"type": "function", "function": {"name": AD_TOOL_NAME}}


def build_user_prompt(property_data) -> str:
    """매물 정보를 user 프롬프트에 채워 넣음. selling points는 있을 때만 한 줄 추가."""
    selling_points_line = ""
    if property_data.selling_points:
        selling_points_line = f"Selling Points: {property_data.selling_points}"
    return USER_PROMPT_TEMPLATE.format(
        location=property_data.location,
        price=property_data.price,
        size=property_data.size,
        selling_points_line=selling_points_line,
    )
