"""Sample utterance library for generation previews.

The generation provider speaks a sample utterance to produce each preview.
Utterances are chosen to suit the requested character, tone, age and
gender, and are padded to the provider's minimum length.
"""

from .models import AttributeSet

MIN_SAMPLE_LENGTH = 150

CONTINUATION = (
    "This extra passage gives the voice enough room to show its character "
    "and its natural rhythm from start to finish."
)

CHARACTER_SAMPLES = {
    "pirate": (
        "Ahoy, friend, and welcome aboard! The tide is turning and the wind is "
        "at our backs. Tell me where you want to sail and I'll chart the course "
        "myself."
    ),
    "detective": (
        "Let's go over the facts one more time. Every detail matters in a case "
        "like this, and I have a feeling we're closer to the truth than anyone "
        "thinks. What did you notice?"
    ),
    "wizard": (
        "Greetings, traveler. I have studied the old texts for longer than I care "
        "to admit, and I sense your journey has only just begun. Tell me, what "
        "knowledge do you seek?"
    ),
    "ninja": (
        "Move quietly and listen closely. Every step must be deliberate, every "
        "choice precise. The shadows will guide us if we are patient. Now, what "
        "is our objective?"
    ),
    "narrator": (
        "Our story begins on an ordinary morning, in a town where nothing much "
        "ever happened. That was about to change, and the people who lived there "
        "would never see their home the same way again."
    ),
    "announcer": (
        "Ladies and gentlemen, welcome to tonight's main event! The crowd is on "
        "its feet, the lights are up, and the moment you've all been waiting for "
        "is finally here."
    ),
}

CLEAR_SAMPLES = {
    "older": (
        "Let me take my time and speak with you clearly. Over the years I have "
        "learned that patience and careful words make all the difference, so "
        "every word today will be easy to follow."
    ),
    "default": (
        "I want to make sure you hear every word clearly today, so I'll speak "
        "carefully and at an easy pace. Let me know whenever you'd like me to go "
        "over anything again."
    ),
}

# (age_group, gender) -> default template, energetic variant
AGE_GENDER_SAMPLES: dict[tuple[str, str], tuple[str, str | None]] = {
    ("older", "male"): (
        "Let me tell you a little story. Back when I was younger the world moved "
        "a bit slower, and I still believe a calm conversation is one of life's "
        "small comforts.",
        None,
    ),
    ("older", "female"): (
        "Hello there, it's lovely to speak with you today. I've always believed a "
        "warm conversation can brighten someone's afternoon, so let me help with "
        "whatever you need.",
        None,
    ),
    ("young", "male"): (
        "Hey there, good to connect with you today. I'm here to help with "
        "whatever you need, so just tell me what's going on and we'll figure it "
        "out together.",
        "Hey! Really great to talk with you today. I'm excited to jump in and get "
        "things moving, so what can I do for you right now? Let's make it happen!",
    ),
    ("young", "female"): (
        "Hi! It's so nice to speak with you. I'm here to help today, so feel free "
        "to tell me what you need and I'll make sure we get everything sorted out.",
        "Hey! It's really nice to talk with you today. I love starting the day "
        "with a cheerful conversation. What can I help you with? I'm excited to "
        "get started!",
    ),
    ("middle-aged", "male"): (
        "Hello, I'm here to help you today. Tell me what you need and I'll take "
        "care of it. We can go through everything step by step until it's done.",
        None,
    ),
    ("middle-aged", "female"): (
        "Hello there! I'm here to help you today. Feel free to tell me what you "
        "need, and I'll make sure we take care of every detail together.",
        None,
    ),
}

CALM_SAMPLES = {
    "male": (
        "Hello there. Take your time, there's no rush at all. I'm here to help "
        "with whatever you need, and we'll work through it together at a "
        "comfortable pace."
    ),
    "female": (
        "Hello, it's so nice to speak with you today. Take a breath and let me "
        "know how I can help. We'll work through everything together, one step "
        "at a time."
    ),
}

BRITISH_SAMPLES = {
    "male": "Right, hello there. I'd be delighted to help you with that today. Let me see what I can do for you.",
    "female": "Hello there, I'd be more than happy to help you with that. Let me see what I can do for you today.",
}

DEFAULT_SAMPLE = (
    "Hello, I'm here to help you today. Let me know what you need and I'll "
    "assist you with it. I'm ready whenever you are."
)

# Localized previews with a same-language continuation phrase
LANGUAGE_SAMPLES: dict[str, tuple[str, str]] = {
    "es": (
        "Hola, así es como sonará tu nueva voz. Estoy aquí para ayudarte a "
        "gestionar tus llamadas y representarte profesionalmente.",
        "Este texto adicional permite apreciar el carácter de la voz y su ritmo "
        "natural de principio a fin.",
    ),
    "fr": (
        "Bonjour, voici comment votre nouvelle voix va sonner. Je suis là pour "
        "gérer vos appels et vous représenter professionnellement.",
        "Ce passage supplémentaire laisse à la voix le temps de montrer son "
        "caractère et son rythme naturel.",
    ),
    "de": (
        "Hallo, so wird Ihre neue Stimme klingen. Ich bin hier, um Ihre Anrufe "
        "zu verwalten und Sie professionell zu vertreten.",
        "Dieser zusätzliche Text gibt der Stimme genug Raum, ihren Charakter und "
        "ihren natürlichen Rhythmus zu zeigen.",
    ),
    "it": (
        "Ciao, ecco come suonerà la tua nuova voce. Sono qui per gestire le tue "
        "chiamate e rappresentarti in modo professionale.",
        "Questo testo aggiuntivo lascia alla voce lo spazio per mostrare il suo "
        "carattere e il suo ritmo naturale.",
    ),
    "pt": (
        "Olá, é assim que a sua nova voz vai soar. Estou aqui para gerir as suas "
        "chamadas e representá-lo profissionalmente.",
        "Este texto adicional dá à voz espaço para mostrar o seu carácter e o seu "
        "ritmo natural.",
    ),
}


def pad_to_length(
    text: str, minimum: int = MIN_SAMPLE_LENGTH, continuation: str = CONTINUATION
) -> str:
    """Append the continuation phrase until text reaches the minimum length."""
    while len(text) < minimum:
        text = f"{text} {continuation}"
    return text


def select_template(attributes: AttributeSet) -> str:
    """Pick the unpadded template best suited to the attributes.

    Priority: character archetype, clear speech, age and gender with tone
    or accent variants, then the neutral default.
    """
    if attributes.character in CHARACTER_SAMPLES:
        return CHARACTER_SAMPLES[attributes.character]

    if "clear" in attributes.tones:
        key = "older" if attributes.age_group == "older" else "default"
        return CLEAR_SAMPLES[key]

    gender = attributes.gender
    if gender not in ("male", "female"):
        return DEFAULT_SAMPLE

    age_group = attributes.age_group
    if age_group not in ("young", "older"):
        if "calm" in attributes.tones or "warm" in attributes.tones:
            return CALM_SAMPLES[gender]
        if attributes.accent and "british" in attributes.accent.lower():
            return BRITISH_SAMPLES[gender]
        age_group = "middle-aged"

    template, energetic = AGE_GENDER_SAMPLES[(age_group, gender)]
    if energetic and "energetic" in attributes.tones:
        return energetic
    return template


def sample_utterance(attributes: AttributeSet, language: str | None = None) -> str:
    """Build the padded sample utterance for a generation request.

    Args:
        attributes: Parsed description attributes
        language: Target language code; a localized preview is used when
            one exists for a language other than English

    Returns:
        Utterance of at least MIN_SAMPLE_LENGTH characters
    """
    code = (language or "").split("-")[0].lower()
    if code in LANGUAGE_SAMPLES:
        text, continuation = LANGUAGE_SAMPLES[code]
        return pad_to_length(text, continuation=continuation)

    return pad_to_length(select_template(attributes))
