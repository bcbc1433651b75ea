# gitaworld/sample_content.py
"""
Bundled content shown on public pages when the database returns nothing
(or cannot be reached). Shaped like the ORM rows so templates don't care.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class SampleChapter:
    chapter_number: int
    title: str
    english_title: str
    total_verses: int
    summary: str
    sanskrit_title: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class SampleVerse:
    verse_number: int
    sanskrit_text: str
    transliteration: str
    english_translation: str
    languages: List[str] = field(default_factory=list)
    title: Optional[str] = None
    commentary: Optional[str] = None
    youtube_url: Optional[str] = None
    video_file_path: Optional[str] = None
    whatsapp_share_text: Optional[str] = None


@dataclass(frozen=True)
class SampleLanguage:
    name: str
    code: str
    native_name: Optional[str]
    verse_count: int


SAMPLE_CHAPTERS = [
    SampleChapter(1, "Arjuna Vishada Yoga", "The Yoga of Arjuna's Dejection", 47,
                  "Arjuna's moral and emotional dilemma on the battlefield, setting the stage for Krishna's divine guidance.",
                  description=(
                      "In this opening chapter, we witness Arjuna's moral crisis on the battlefield of Kurukshetra. "
                      "Overwhelmed by the sight of his relatives, teachers, and friends assembled for war, Arjuna "
                      "experiences profound grief and confusion about his duty as a warrior."
                  )),
    SampleChapter(2, "Sankhya Yoga", "The Yoga of Knowledge", 72,
                  "Krishna introduces the fundamental concepts of the soul, duty, and the path of knowledge."),
    SampleChapter(3, "Karma Yoga", "The Yoga of Action", 43,
                  "The path of selfless action and the importance of performing one's duty without attachment."),
    SampleChapter(4, "Jnana Karma Sanyasa Yoga", "The Yoga of Knowledge and Action", 42,
                  "The relationship between knowledge, action, and renunciation in spiritual practice."),
    SampleChapter(5, "Karma Sanyasa Yoga", "The Yoga of Renunciation of Action", 29,
                  "True renunciation and the unity of action and meditation paths."),
    SampleChapter(6, "Dhyana Yoga", "The Yoga of Meditation", 47,
                  "The practice of meditation, self-discipline, and achieving inner balance."),
    SampleChapter(7, "Jnana Vijnana Yoga", "The Yoga of Knowledge and Realization", 30,
                  "Krishna reveals His divine nature and the different paths souls take toward Him."),
    SampleChapter(8, "Aksara Brahma Yoga", "The Yoga of the Imperishable Brahman", 28,
                  "The nature of the Supreme, the individual soul, and the cosmic principles."),
    SampleChapter(9, "Raja Vidya Raja Guhya Yoga", "The Yoga of Royal Knowledge and Royal Secret", 34,
                  "The most sacred and royal knowledge about devotion and divine grace."),
    SampleChapter(10, "Vibhuti Yoga", "The Yoga of Divine Manifestations", 42,
                  "Krishna describes His divine manifestations and glories throughout creation."),
    SampleChapter(11, "Visvarupa Darshana Yoga", "The Yoga of the Vision of the Universal Form", 55,
                  "Arjuna witnesses Krishna's cosmic form, revealing the universal divine presence."),
    SampleChapter(12, "Bhakti Yoga", "The Yoga of Devotion", 20,
                  "The supreme path of loving devotion and surrender to the Divine."),
    SampleChapter(13, "Ksetra Ksetrajna Vibhaga Yoga", "The Yoga of the Field and the Knower of the Field", 35,
                  "The distinction between the body-mind complex and the conscious soul within."),
    SampleChapter(14, "Gunatraya Vibhaga Yoga", "The Yoga of the Three Modes of Nature", 27,
                  "Understanding the three modes of material nature and transcending them."),
    SampleChapter(15, "Purusottama Yoga", "The Yoga of the Supreme Person", 20,
                  "Krishna reveals Himself as the Supreme Person beyond the perishable and imperishable."),
    SampleChapter(16, "Daivasura Sampad Vibhaga Yoga", "The Yoga of Divine and Demonic Natures", 24,
                  "The characteristics of divine and demonic natures in human behavior."),
    SampleChapter(17, "Sraddhatraya Vibhaga Yoga", "The Yoga of the Three Types of Faith", 28,
                  "The three types of faith and their corresponding worship, food, and sacrifice."),
    SampleChapter(18, "Moksa Sanyasa Yoga", "The Yoga of Liberation through Renunciation", 78,
                  "The culmination of all teachings, emphasizing complete surrender and liberation."),
]

# Only the opening verses of chapter 1 ship with the app
SAMPLE_VERSES = {
    1: [
        SampleVerse(
            1,
            "धृतराष्ट्र उवाच धर्मक्षेत्रे कुरुक्षेत्रे समवेता युयुत्सवः। मामकाः पाण्डवाश्चैव किमकुर्वत सञ्जय॥",
            "dhṛitarāśhtra uvācha dharma-kṣhetre kuru-kṣhetre samavetā yuyutsavaḥ māmakāḥ pāṇḍavāśh chaiva kim akurvata sañjaya",
            "Dhritarashtra said: O Sanjaya, after gathering on the holy field of Kurukshetra, and desiring to fight, "
            "what did my sons and the sons of Pandu do?",
            ["English", "Hindi", "Telugu", "Tamil"],
        ),
        SampleVerse(
            2,
            "सञ्जय उवाच दृष्ट्वा तु पाण्डवानीकं व्यूढं दुर्योधनस्तदा। आचार्यमुपसङ्गम्य राजा वचनमब्रवीत्॥",
            "sañjaya uvācha dṛiṣhṭvā tu pāṇḍavānīkaṁ vyūḍhaṁ duryodhanas tadā āchāryam upasaṅgamya rājā vachanam abravīt",
            "Sanjaya said: On seeing the Pandava army arranged in battle formation, King Duryodhana approached his "
            "teacher Drona, and spoke the following words.",
            ["English", "Hindi", "Telugu", "Sanskrit"],
        ),
        SampleVerse(
            3,
            "पश्यैतां पाण्डुपुत्राणामाचार्य महतीं चमूम्। व्यूढां द्रुपदपुत्रेण तव शिष्येण धीमता॥",
            "paśhyaitāṁ pāṇḍu-putrāṇām āchārya mahatīṁ chamūm vyūḍhāṁ drupada-putreṇa tava śhiṣhyeṇa dhīmatā",
            "Behold, O teacher, this mighty army of the sons of Pandu, arranged in battle formation by your "
            "intelligent disciple, the son of Drupada.",
            ["English", "Hindi", "Tamil", "Malayalam"],
        ),
    ],
}

SAMPLE_LANGUAGES = [
    SampleLanguage("Hindi", "hi", "हिन्दी", 145),
    SampleLanguage("Telugu", "te", "తెలుగు", 98),
    SampleLanguage("Tamil", "ta", "தமிழ்", 87),
    SampleLanguage("Sanskrit", "sa", "संस्कृतम्", 156),
    SampleLanguage("Bengali", "bn", "বাংলা", 76),
    SampleLanguage("Gujarati", "gu", "ગુજરાતી", 63),
    SampleLanguage("Marathi", "mr", "मराठी", 54),
    SampleLanguage("Kannada", "kn", "ಕನ್ನಡ", 38),
    SampleLanguage("Malayalam", "ml", "മലയാളം", 35),
    SampleLanguage("English", "en", "English", 189),
    SampleLanguage("Spanish", "es", "Español", 67),
    SampleLanguage("French", "fr", "Français", 45),
]


def sample_chapter(chapter_number: int) -> Optional[SampleChapter]:
    for ch in SAMPLE_CHAPTERS:
        if ch.chapter_number == chapter_number:
            return ch
    return None


def sample_verses(chapter_number: int) -> List[SampleVerse]:
    return SAMPLE_VERSES.get(chapter_number, [])
