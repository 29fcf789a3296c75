"""Built-in prompt templates seeded into every TemplateStore.with_defaults()."""

from __future__ import annotations

from services.tutor_service.templates import PromptTemplate, TemplateCategory

CONVERSATION_TUTOR = "conversation_tutor"
CONVERSATION_FRIEND = "conversation_friend"
GRAMMAR_CORRECTION = "grammar_correction"
STYLE_IMPROVEMENT = "style_improvement"
VOCABULARY_ANALYSIS = "vocabulary_analysis"
CONVERSATION_STARTER = "conversation_starter"

NO_HISTORY_SENTENCE = "No previous conversation."
DEFAULT_TOPICS = "general conversation"
STARTER_TOPICS = "general conversation, daily life, hobbies, travel"


TUTOR_PROMPT = """You are a friendly and encouraging {{language}} language tutor. Your student is at a {{level}} level and wants to practice conversation skills.

Guidelines:
- Engage in natural conversation appropriate for {{level}} level
- Correct major errors gently and provide explanations
- Ask follow-up questions to encourage more speaking
- Use vocabulary and grammar suitable for {{level}} level
- Be patient and supportive
- Provide cultural context when relevant

Previous conversation context:
{{conversationHistory}}

Student's message: "{{userMessage}}"

Respond naturally as a helpful tutor, continuing the conversation while providing gentle guidance."""

FRIEND_PROMPT = """You are a friendly conversation partner helping someone practice {{language}}. Act like a native speaker friend who is patient and helpful.

Guidelines:
- Keep the conversation natural and engaging
- Match the {{level}} level of the learner
- Don't be overly formal unless the context requires it
- Show interest in what they're saying
- Ask questions to keep the conversation flowing
- Gently correct serious mistakes without breaking the flow

Context: {{conversationHistory}}

Their message: "{{userMessage}}"

Respond as a friendly conversation partner."""

GRAMMAR_PROMPT = """Analyze the following {{language}} text for grammatical errors and provide detailed corrections:

Text: "{{text}}"

Please provide:
1. **Corrected Version**: The text with all grammatical errors fixed
2. **Error Analysis**: List each error with explanation
3. **Grammar Rules**: Relevant grammar rules that apply
4. **Learning Tips**: Suggestions to avoid similar errors

Format your response clearly with sections for easy understanding. Focus on being educational and helpful."""

STYLE_PROMPT = """Analyze and improve the writing style of this {{language}} text:

Text: "{{text}}"

Please provide:
1. **Style Assessment**: Evaluate formality, clarity, and flow
2. **Improved Version**: Rewrite with better style
3. **Specific Changes**: Explain each improvement made
4. **Style Tips**: General advice for better writing

Consider the {{level}} level of the learner and provide appropriate suggestions."""

VOCABULARY_PROMPT = """Analyze the vocabulary usage in this {{language}} text and suggest improvements:

Text: "{{text}}"

For a {{level}} level learner, please provide:
1. **Vocabulary Assessment**: Current level and appropriateness
2. **Enhanced Version**: Text with improved vocabulary
3. **Word Explanations**: Meaning and usage of new words suggested
4. **Vocabulary Building Tips**: How to expand vocabulary at this level

Focus on making the vocabulary more sophisticated while remaining appropriate for the learner's level."""

STARTER_PROMPT = """Generate engaging conversation starters for a {{level}} level {{language}} learner.

Topic interests: {{topics}}

Create 5 conversation starters that are:
- Appropriate for {{level}} level
- Engaging and interesting
- Encourage extended dialogue
- Cover different conversation skills (asking questions, expressing opinions, describing experiences)

Format each starter with a brief explanation of what conversation skills it practices."""


DEFAULT_TEMPLATES: tuple[PromptTemplate, ...] = (
    PromptTemplate(
        id=CONVERSATION_TUTOR,
        name="Language Tutor",
        description="AI tutor for language learning conversations",
        template=TUTOR_PROMPT,
        variables=["language", "level", "conversationHistory", "userMessage"],
        category=TemplateCategory.CONVERSATION,
    ),
    PromptTemplate(
        id=CONVERSATION_FRIEND,
        name="Conversation Partner",
        description="AI conversation partner for casual practice",
        template=FRIEND_PROMPT,
        variables=["language", "level", "conversationHistory", "userMessage"],
        category=TemplateCategory.CONVERSATION,
    ),
    PromptTemplate(
        id=GRAMMAR_CORRECTION,
        name="Grammar Correction",
        description="Detailed grammar analysis and correction",
        template=GRAMMAR_PROMPT,
        variables=["language", "text"],
        category=TemplateCategory.CORRECTION,
    ),
    PromptTemplate(
        id=STYLE_IMPROVEMENT,
        name="Style Improvement",
        description="Writing style analysis and suggestions",
        template=STYLE_PROMPT,
        variables=["language", "text", "level"],
        category=TemplateCategory.CORRECTION,
    ),
    PromptTemplate(
        id=VOCABULARY_ANALYSIS,
        name="Vocabulary Analysis",
        description="Vocabulary usage analysis and enhancement",
        template=VOCABULARY_PROMPT,
        variables=["language", "text", "level"],
        category=TemplateCategory.ANALYSIS,
    ),
    PromptTemplate(
        id=CONVERSATION_STARTER,
        name="Conversation Starter",
        description="Generate conversation starters for practice",
        template=STARTER_PROMPT,
        variables=["level", "language", "topics"],
        category=TemplateCategory.SYSTEM,
    ),
)
