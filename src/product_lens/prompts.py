"""Prompts sent to the model provider."""

EXTRACTION_PROMPT = """Identify the product shown in these photos and return ONLY the following JSON object.
Do not output any other text.

{
  "name": string,
  "model": string,
  "jan": string,
  "upc": string,
  "release_date": string,
  "msrp_currency": string,
  "msrp": number,
  "confidence": number,
  "notes": string
}

Rules:
- jan and upc contain digits only.
- release_date is YYYY, YYYY-MM or YYYY-MM-DD.
- Use an empty string or 0 for anything unknown."""

ENRICHMENT_SYSTEM_INSTRUCTION = (
    "出力は必ず指定されたschemaのJSONのみ。金額は円（JPY）のみで表記すること。"
)

ENRICHMENT_PROMPT_TEMPLATE = """あなたは日本語で出力する商品リサーチャーです。次の対象について、
「詳細説明」と「市場での流通価格（中古相場）」の2項目を含むJSONだけを返してください。
金額は必ず円（JPY）のみ、3桁区切り+「円」表記（例: 35,200円）で書いてください。定価は必ず含めてください。
schema:
{{
  "detail_description": string, // 容量・主な仕様・初出発売年・定価（円）を含めた200字以内の説明
  "market_overview": string,    // メルカリ/ヤフオク/通販などの流通相場を文章で（すべて円表記）
  "official_release": string,   // 例: "1992" または "1992-10"
  "official_msrp_jpy": number   // 定価（円, 数値）。不明なら0
}}
対象: {query}"""


def build_enrichment_prompt(query: str) -> str:
    return ENRICHMENT_PROMPT_TEMPLATE.format(query=query)
