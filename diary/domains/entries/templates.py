"""Built-in starter templates offered when creating an entry."""

from typing import List

from diary.domains.entries.schemas import EntryTemplate


def _prompts(heading: str, *questions: str) -> str:
    lines = [f"<h2>{heading}</h2>"]
    for question in questions:
        lines.append(f"<p><strong>{question}</strong></p>")
        lines.append("<p></p>")
    return "\n".join(lines)


ENTRY_TEMPLATES: List[EntryTemplate] = [
    EntryTemplate(
        id="daily",
        name="Daily Reflection",
        description="Reflect on your day, feelings, and experiences",
        content=_prompts(
            "Today's Reflection",
            "How was my day overall?",
            "What made me happy today?",
            "What challenged me today?",
            "What am I grateful for?",
            "Tomorrow I want to...",
        ),
        tags="daily, reflection, gratitude",
        mood="😊",
    ),
    EntryTemplate(
        id="gratitude",
        name="Gratitude Journal",
        description="Focus on things you are thankful for",
        content="\n".join([
            "<h2>Gratitude Entry</h2>",
            "<p><strong>Today I am grateful for:</strong></p>",
            "<p>1. </p>",
            "<p>2. </p>",
            "<p>3. </p>",
            "<p></p>",
            "<p><strong>Why am I grateful for these things?</strong></p>",
            "<p></p>",
            "<p><strong>How did these things make me feel?</strong></p>",
            "<p></p>",
        ]),
        tags="gratitude, thankful, positive",
        mood="🙏",
    ),
    EntryTemplate(
        id="goals",
        name="Goal Setting",
        description="Set and track your personal goals",
        content="\n".join([
            "<h2>Goal Setting</h2>",
            "<p><strong>My main goal for this period:</strong></p>",
            "<p></p>",
            "<p><strong>Why is this goal important to me?</strong></p>",
            "<p></p>",
            "<p><strong>Steps to achieve this goal:</strong></p>",
            "<p>1. </p>",
            "<p>2. </p>",
            "<p>3. </p>",
            "<p></p>",
            "<p><strong>Timeline:</strong></p>",
            "<p></p>",
            "<p><strong>How will I measure success?</strong></p>",
            "<p></p>",
        ]),
        tags="goals, planning, achievement",
        mood="🎯",
    ),
    EntryTemplate(
        id="travel",
        name="Travel Journal",
        description="Document your travel experiences",
        content=_prompts(
            "Travel Entry",
            "Where am I?",
            "What did I do today?",
            "What was the highlight of the day?",
            "What surprised me?",
            "What would I do differently?",
            "Memorable moments:",
        ),
        tags="travel, adventure, memories",
        mood="✈️",
    ),
    EntryTemplate(
        id="learning",
        name="Learning Notes",
        description="Document what you learned today",
        content=_prompts(
            "Learning Notes",
            "What did I learn today?",
            "How did I learn it?",
            "Why is this important?",
            "How can I apply this knowledge?",
            "Questions I still have:",
            "Resources to explore further:",
        ),
        tags="learning, knowledge, growth",
        mood="📚",
    ),
    EntryTemplate(
        id="dreams",
        name="Dream Journal",
        description="Record and analyze your dreams",
        content=_prompts(
            "Dream Journal",
            "Date of dream:",
            "What happened in my dream?",
            "How did I feel during the dream?",
            "What emotions did I wake up with?",
            "Possible meanings or symbols:",
            "Connection to my waking life:",
        ),
        tags="dreams, subconscious, symbols",
        mood="💫",
    ),
    EntryTemplate(
        id="blank",
        name="Blank Entry",
        description="Start with a clean slate",
        content="",
        tags="",
        mood="",
    ),
]
