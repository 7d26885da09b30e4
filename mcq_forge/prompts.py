"""Prompt templates for quiz generation and question-bank extraction."""
from __future__ import annotations

from mcq_forge.models import MODES

# Field names stay English in every locale
JSON_EXAMPLE = """\
[
  {{"question":"...","options":["...","...","...","..."],"correct_index":{example_index},"explanation":"..."}}
]"""

MARATHI_GENERATE_LEAD = (
    "त्या आधारावर MPSC स्तरावरील {num_questions} बहुपर्यायी प्रश्न (MCQs) तयार करा. "
    "प्रत्येक प्रश्नासाठी स्पष्टीकरण द्या. "
)

MARATHI_EXTRACT_LEAD = (
    "हा मजकूर प्रश्नसंच (Question Bank) आहे. त्यातील MCQs **जसेच्या तसे** काढा "
    "आणि प्रत्येक प्रश्नासाठी योग्य उत्तर व स्पष्टीकरण द्या. "
)

MARATHI_PROMPT = """\
तुमच्यासमोर दिलेला मजकूर वाचा. {lead}
📘 प्रश्न प्रकार:
- विधान I आणि II
- सत्य / असत्य
- योग्य-अयोग्य
- जोड्या लावा
- क्रम लावा
- कारण-परिणाम
- संकल्पनात्मक/विश्लेषणात्मक

📌 सूचना:
- नेहमी 4 पर्याय द्या.
- "correct_index" योग्य उत्तरासाठी (0 = पहिला).
- "explanation" द्या.
- JSON array व्यतिरिक्त दुसरे काहीही आउटपुट देऊ नका.

उदाहरण:
{example}

मजकूर:
{text}"""

ENGLISH_GENERATE_LEAD = (
    "Generate {num_questions} competitive-level MCQs. Each must include explanation. "
)

ENGLISH_EXTRACT_LEAD = (
    "This is a question bank. Extract the existing MCQs exactly, "
    "and provide the correct answer with explanation. "
)

ENGLISH_PROMPT = """\
Read the content carefully. {lead}
Guidelines:
- Always give 4 options.
- Use "correct_index" (0 = first).
- Add "explanation" for reasoning.
- Output ONLY valid JSON array, nothing else.

Example:
{example}

Context:
{text}"""

TEMPLATES = {
    "mr": (MARATHI_PROMPT, {"generate": MARATHI_GENERATE_LEAD, "extract": MARATHI_EXTRACT_LEAD}, 1),
    "en": (ENGLISH_PROMPT, {"generate": ENGLISH_GENERATE_LEAD, "extract": ENGLISH_EXTRACT_LEAD}, 2),
}


def build_prompt(text: str, num_questions: int, mode: str = "generate", language: str = "mr") -> str:
    """Render the locale template for *mode* around *text*.

    Anything other than ``mr`` gets the English template.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode!r}")
    template, leads, example_index = TEMPLATES["mr" if language == "mr" else "en"]
    lead = leads[mode].format(num_questions=num_questions)
    example = JSON_EXAMPLE.format(example_index=example_index)
    return template.format(lead=lead, example=example, text=text)
