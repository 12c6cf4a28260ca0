"""
Per-language keyword and pattern tables.

Every supported language maps to one immutable LanguageProfile. Lookups
for an unknown tag fall back to the English profile; tags are accepted in
recognizer form ("hi-IN", "en_US", "HI").
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .patterns import postposition_led, preposition_led, suffix_led, with_shared_fallbacks

FALLBACK_LANGUAGE = 'en'


@dataclass(frozen=True)
class LanguageProfile:
    """Vocabulary for one language."""

    tag: str
    payment_keywords: tuple[str, ...]  # money received from the customer
    credit_keywords: tuple[str, ...]  # money/goods given to the customer
    add_keywords: tuple[str, ...]
    customer_keywords: tuple[str, ...]
    number_keywords: tuple[str, ...]
    name_patterns: tuple[re.Pattern[str], ...]
    transaction_example: str
    customer_example: str

    def __post_init__(self) -> None:
        overlap = set(self.payment_keywords) & set(self.credit_keywords)
        if overlap:
            raise ValueError(f'{self.tag}: payment and credit keywords overlap: {sorted(overlap)}')

    @property
    def stopwords(self) -> frozenset[str]:
        """Keywords that can never be part of a spoken name."""
        return frozenset(
            self.payment_keywords
            + self.credit_keywords
            + self.add_keywords
            + self.customer_keywords
            + self.number_keywords
        )


def _profile(tag: str, **fields) -> LanguageProfile:
    fields['name_patterns'] = with_shared_fallbacks(fields.get('name_patterns', ()))
    for key in ('payment_keywords', 'credit_keywords', 'add_keywords', 'customer_keywords', 'number_keywords'):
        fields[key] = tuple(kw.lower() for kw in fields[key])
    return LanguageProfile(tag=tag, **fields)


_PROFILES = {
    'en': _profile(
        'en',
        payment_keywords=('from', 'received', 'got', 'taken', 'get'),
        credit_keywords=('to', 'give', 'given', 'paid', 'give to'),
        add_keywords=('add', 'create', 'new'),
        customer_keywords=('customer', 'cust', 'contact', 'person'),
        number_keywords=('number', 'num', 'phone', 'mobile'),
        name_patterns=(preposition_led(('to', 'from')),),
        transaction_example='Example:\nCredit: "Give 500 to John"\nPayment: "Received 500 from John"',
        customer_example='Example: "Add customer John number 9876543210"',
    ),
    'hi': _profile(
        'hi',
        payment_keywords=('से', 'मिले', 'पाए', 'मिला', 'लिया'),
        credit_keywords=('को', 'दिए', 'दे', 'दिया', 'दिई'),
        add_keywords=('जोड़ें', 'बनाएं', 'नया'),
        customer_keywords=('ग्राहक', 'व्यक्ति'),
        number_keywords=('नंबर', 'फोन', 'संख्या'),
        name_patterns=(postposition_led(('से', 'को', 'ने')),),
        transaction_example='उदाहरण:\nक्रेडिट: "जॉन को 500 दिए"\nभुगतान: "जॉन से 500 मिले"',
        customer_example='उदाहरण: "ग्राहक जॉन नंबर 9876543210 जोड़ें"',
    ),
    'mr': _profile(
        'mr',
        payment_keywords=('कडून', 'मिळाले', 'घेतले', 'पाहिले'),
        credit_keywords=('ला', 'दिले', 'दे', 'दिली', 'दिल'),
        add_keywords=('जोडा', 'बनवा', 'नवा'),
        customer_keywords=('ग्राहक', 'व्यक्ती'),
        number_keywords=('नंबर', 'फोन', 'क्रमांक'),
        name_patterns=(
            postposition_led(('कडून', 'ला', 'ना')),
            suffix_led(('कडून', 'ला')),
        ),
        transaction_example='उदाहरण:\nक्रेडिट: "जॉन ला 500 दिले"\nभुगतान: "जॉन कडून 500 मिळाले"',
        customer_example='उदाहरण: "ग्राहक जॉन नंबर 9876543210 जोडा"',
    ),
    'gu': _profile(
        'gu',
        payment_keywords=('થી', 'મળ્યું', 'મેળવ્યું', 'લીધું', 'લ્યું'),
        credit_keywords=('ને', 'આપ્યું', 'આપ', 'આપી'),
        add_keywords=('ઉમેરો', 'બનાવો'),
        customer_keywords=('ગ્રાહક', 'વ્યક્તિ'),
        number_keywords=('નંબર', 'ફોન', 'સંખ્યા'),
        name_patterns=(
            postposition_led(('પાસેથી', 'થી', 'ને')),
            suffix_led(('થી', 'ને')),
        ),
        transaction_example='ઉદાહરણ:\nક્રેડિટ: "જોનને 500 આપ્યું"\nપેમેન્ટ: "જોનથી 500 મળ્યું"',
        customer_example='ઉદાહરણ: "ગ્રાહક જોન નંબર 9876543210 ઉમેરો"',
    ),
    'ta': _profile(
        'ta',
        payment_keywords=('இருந்து', 'கிடைத்தது', 'பெற்றேன்', 'வாங்கினேன்'),
        credit_keywords=('க்கு', 'கொடுத்தேன்', 'கொடுத்த'),
        add_keywords=('சேர்', 'உருவாக்க'),
        customer_keywords=('வாடிக்கையாளர்', 'நபர்'),
        number_keywords=('எண்', 'போன்'),
        name_patterns=(
            postposition_led(('இடமிருந்து', 'இருந்து')),
            suffix_led(('ிடமிருந்து', 'இடமிருந்து', 'இருந்து', 'க்கு', 'கு')),
        ),
        transaction_example='உதாரணம்:\nகிரெடிட்: "ஜான்கு 500 கொடுத்தேன்"\nபேமெண்ட்: "ஜானிடமிருந்து 500 கிடைத்தது"',
        customer_example='உதாரணம்: "வாடிக்கையாளர் ஜான் எண் 9876543210 சேர்க்கவும்"',
    ),
    'te': _profile(
        'te',
        payment_keywords=('నుండి', 'వచ్చింది', 'పొందాను', 'తీసుకున్నాను'),
        credit_keywords=('కు', 'ఇచ్చిన్', 'ఇచ్చా', 'ఇవ్వాలి'),
        add_keywords=('జోడించండి', 'సృష్టించండి'),
        customer_keywords=('కస్టమర్', 'వ్యక్తి'),
        number_keywords=('నంబర్', 'ఫోన్'),
        name_patterns=(
            postposition_led(('నుండి', 'కు')),
            suffix_led(('నుండి', 'కు')),
        ),
        transaction_example='ఉదాహరణ:\nక్రెడిట్: "జాన్కు 500 ఇచ్చా"\nపేమెంట్: "జాన్ నుండి 500 వచ్చింది"',
        customer_example='ఉదాహరణ: "కస్టమర్ జాన్ నంబర్ 9876543210 జోడించండి"',
    ),
    'kn': _profile(
        'kn',
        payment_keywords=('ಗಿಂದ', 'ಬಂದಿತು', 'ಪಡೆದೆ', 'ತೆಗೆದುಕೊಂಡೆ'),
        credit_keywords=('ಗೆ', 'ಕೊಟ್ಟೆ', 'ಕೊಡುತ್ತಿದೆ', 'ಕೊಟ್ಟಿದೆ'),
        add_keywords=('ಸೇರಿಸಿ', 'ರಚಿಸಿ'),
        customer_keywords=('ಗ್ರಾಹಕ', 'ವ್ಯಕ್ತಿ'),
        number_keywords=('ಸಂಖ್ಯೆ', 'ಫೋನ್'),
        name_patterns=(suffix_led(('ಗಿಂದ', 'ಇಂದ', 'ಕ್ಕೆ', 'ಗೆ')),),
        transaction_example='ಉದಾಹರಣೆ:\nಕ್ರೆಡಿಟ್: "ಜಾನ್ಗೆ 500 ಕೊಟ್ಟೆ"\nಪೇಮೆಂಟ್: "ಜಾನ್ಗಿಂದ 500 ಬಂದಿತು"',
        customer_example='ಉದಾಹರಣೆ: "ಗ್ರಾಹಕ ಜಾನ್ ಸಂಖ್ಯೆ 9876543210 ಸೇರಿಸಿ"',
    ),
    'ml': _profile(
        'ml',
        payment_keywords=('നിന്ന്', 'ലഭിച്ചു', 'കിട്ടി', 'വാങ്ങി'),
        credit_keywords=('ിന്', 'കൊടുത്തു', 'കൊടുക്കും', 'കൊടുത്ത'),
        add_keywords=('ചേർക്കുക', 'സൃഷ്ടിക്കുക'),
        customer_keywords=('ഗ്രാഹകൻ', 'വ്യക്തി'),
        number_keywords=('നമ്പർ', 'ഫോൺ'),
        name_patterns=(
            postposition_led(('നിന്ന്',)),
            suffix_led(('ിന്', 'ക്ക്')),
        ),
        transaction_example='ഉദാഹരണം:\nക്രെഡിറ്റ്: "ജോണിന് 500 കൊടുത്തു"\nപേയ്മെന്റ്: "ജോണിൽ നിന്ന് 500 ലഭിച്ചു"',
        customer_example='ഉദാഹരണം: "ഗ്രാഹകൻ ജോൺ നമ്പർ 9876543210 ചേർക്കുക"',
    ),
    'bn': _profile(
        'bn',
        payment_keywords=('থেকে', 'পেয়েছি', 'নিয়েছি', 'পেলাম'),
        credit_keywords=('কে', 'দিয়েছি', 'দিন', 'দেবেন'),
        add_keywords=('যুক্ত', 'তৈরি'),
        customer_keywords=('গ্রাহক', 'ব্যক্তি'),
        number_keywords=('নম্বর', 'ফোন'),
        name_patterns=(
            postposition_led(('থেকে',)),
            suffix_led(('থেকে', 'কে')),
        ),
        transaction_example='উদাহরণ:\nক্রেডিট: "জনকে 500 দিয়েছি"\nপেমেন্ট: "জন থেকে 500 পেয়েছি"',
        customer_example='উদাহরণ: "গ্রাহক জন নম্বর 9876543210 যুক্ত করুন"',
    ),
    'pa': _profile(
        'pa',
        payment_keywords=('ੋਂ', 'ਮਿਲ', 'ਪਰਾਪਤ', 'ਲਿਆ'),
        credit_keywords=('ਨੂੰ', 'ਦਿੱਤੇ', 'ਦਿਓ', 'ਦੇਵੋ'),
        add_keywords=('ਸ਼ਾਮਿਲ', 'ਬਣਾਓ'),
        customer_keywords=('ਗ੍ਰਾਹਕ', 'ਵਿਅਕਤੀ'),
        number_keywords=('ਨੰਬਰ', 'ਫੋਨ'),
        name_patterns=(postposition_led(('ਕੋਲੋਂ', 'ਤੋਂ', 'ਨੂੰ')),),
        transaction_example='ਉਦਾਹਰਣ:\nਕ੍ਰੈਡਿਟ: "ਜੌਨ ਨੂੰ 500 ਦਿੱਤੇ"\nਭੁਗਤਾਨ: "ਜੌਨ ਤੋਂ 500 ਮਿਲੇ"',
        customer_example='ਉਦਾਹਰਣ: "ਗ੍ਰਾਹਕ ਜੌਨ ਨੰਬਰ 9876543210 ਸ਼ਾਮਿਲ ਕਰੋ"',
    ),
    'or': _profile(
        'or',
        payment_keywords=('ଠାରୁ', 'ମିଳିଛି', 'ପାଇଛି', 'ନେଇଛି'),
        credit_keywords=('ଙ୍କୁ', 'ଦେଇଛି', 'ଦେହେ', 'ଦେବେ'),
        add_keywords=('ଯୋଗ', 'ତିଆରି'),
        customer_keywords=('ଗ୍ରାହକ', 'ବ୍ୟକ୍ତି'),
        number_keywords=('ସଂଖ୍ୟା', 'ଫୋନ'),
        name_patterns=(
            postposition_led(('ଠାରୁ',)),
            suffix_led(('ଠାରୁ', 'ଙ୍କୁ', 'କୁ')),
        ),
        transaction_example='ଉଦାହରଣ:\nକ୍ରେଡିଟ୍: "ଜନ୍‌ଙ୍କୁ 500 ଦେଇଛି"\nଦେୟ: "ଜନ୍‌ ଠାରୁ 500 ମିଳିଛି"',
        customer_example='ଉଦାହରଣ: "ଗ୍ରାହକ ଜନ ସଂଖ୍ୟା 9876543210 ଯୋଗ କର"',
    ),
    'as': _profile(
        'as',
        payment_keywords=('পৰা', 'পালো', 'পাইছো', 'লৈছো'),
        credit_keywords=('ক', 'দিলো', 'দিবা', 'দিছো'),
        add_keywords=('যোগ', 'তৈয়াৰ'),
        customer_keywords=('গ্ৰাহক', 'ব্যক্তি'),
        number_keywords=('নম্বৰ', 'ফোন'),
        name_patterns=(
            postposition_led(('পৰা',)),
            suffix_led(('ক',)),
        ),
        transaction_example='উদাহৰণ:\nক্ৰেডিট: "জনক 500 দিলো"\nপেমেণ্ট: "জনৰ পৰা 500 পালো"',
        customer_example='উদাহৰণ: "গ্ৰাহক জন নম্বৰ 9876543210 যোগ কৰক"',
    ),
    'ur': _profile(
        'ur',
        payment_keywords=('سے', 'ملے', 'لیا', 'پایا'),
        credit_keywords=('کو', 'دیے', 'دینا', 'دو'),
        add_keywords=('شامل', 'بنائیں'),
        customer_keywords=('صارف', 'شخص'),
        number_keywords=('نمبر', 'فون'),
        name_patterns=(postposition_led(('سے', 'کو')),),
        transaction_example='مثال:\nکریڈٹ: "جان کو 500 دیے"\nادائیگی: "جان سے 500 ملے"',
        customer_example='مثال: "صارف جان نمبر 9876543210 شامل کریں"',
    ),
    'kok': _profile(
        'kok',
        payment_keywords=('अड़े', 'मेळले', 'पेलो', 'घेतलो'),
        credit_keywords=('क', 'दिले', 'दे', 'दिलो'),
        add_keywords=('जोडूं', 'बनवूं'),
        customer_keywords=('ग्राहक', 'व्यक्ती'),
        number_keywords=('नंबर', 'फोन'),
        name_patterns=(suffix_led(('ाक', 'ान')),),
        transaction_example='उदाहरण:\nक्रेडिट: "जानाक 500 दिले"\nपेमेंट: "जानान 500 मेळले"',
        customer_example='उदाहरण: "ग्राहक जॉन नंबर 9876543210 जोडूं"',
    ),
    'mai': _profile(
        'mai',
        payment_keywords=('से', 'पेलहुँ', 'पइलहुँ', 'लेलहुँ'),
        credit_keywords=('क', 'देलहुँ', 'दिहलहुँ', 'देबहु'),
        add_keywords=('जोडूं', 'बनवूं'),
        customer_keywords=('ग्राहक', 'व्यक्ती'),
        number_keywords=('नंबर', 'फोन'),
        name_patterns=(
            postposition_led(('से', 'क')),
            suffix_led(('क',)),
        ),
        transaction_example='उदाहरण:\nक्रेडिट: "जॉनक 500 देलहुँ"\nपेमेंट: "जॉन से 500 पेलहुँ"',
        customer_example='उदाहरण: "ग्राहक जॉन नंबर 9876543210 जोडूं"',
    ),
    'sat': _profile(
        'sat',
        payment_keywords=('अड़े', 'पिसेंग', 'लिसेंग', 'घेसेंग'),
        credit_keywords=('ले', 'दिसेंग', 'देसेंग', 'दिहा'),
        add_keywords=('जोडूं', 'बनवूं'),
        customer_keywords=('ग्राहक', 'व्यक्ती'),
        number_keywords=('नंबर', 'फोन'),
        name_patterns=(
            postposition_led(('अड़े',)),
            suffix_led(('ले',)),
        ),
        transaction_example='उदाहरण:\nक्रेडिट: "जॉन-ले 500 दिसेंग"\nपेमेंट: "जॉन अड़े 500 पिसेंग"',
        customer_example='उदाहरण: "ग्राहक जॉन नंबर 9876543210 जोडूं"',
    ),
}

PROFILES: Mapping[str, LanguageProfile] = MappingProxyType(_PROFILES)


def canonical_language(language_tag: str | None) -> str:
    """
    Reduce a recognizer tag to a supported language code.

    "hi-IN" -> "hi", "EN_us" -> "en", unknown or empty -> "en".
    """
    if not language_tag:
        return FALLBACK_LANGUAGE
    tag = language_tag.strip().lower().replace('_', '-')
    if tag in PROFILES:
        return tag
    primary = tag.split('-', 1)[0]
    return primary if primary in PROFILES else FALLBACK_LANGUAGE


def get_profile(language_tag: str | None) -> LanguageProfile:
    """Profile for ``language_tag``, falling back to English."""
    return PROFILES[canonical_language(language_tag)]


def supported_languages() -> list[str]:
    return list(PROFILES)


def usage_example(language_tag: str | None, kind: str = 'transaction') -> str:
    """Localized example utterance shown when a command cannot be parsed."""
    profile = get_profile(language_tag)
    if kind == 'customer':
        return profile.customer_example
    return profile.transaction_example
