"""
Voice, language and phoneme enumerations for Watson Text to Speech.

Values are the identifiers the service expects on the wire.
"""

from enum import Enum


class WatsonVoice(str, Enum):
    """
    Voices offered by the Text to Speech service.

    The enum value is the voice ID used in URLs and the voice parameter.
    """
    AR_MS_OMAR = "ar-MS_OmarVoice"
    CS_CZ_ALENA = "cs-CZ_AlenaVoice"
    DE_DE_BIRGIT_V3 = "de-DE_BirgitV3Voice"
    DE_DE_DIETER_V3 = "de-DE_DieterV3Voice"
    DE_DE_ERIKA_V3 = "de-DE_ErikaV3Voice"
    EN_AU_CRAIG = "en-AU_CraigVoice"
    EN_AU_MADISON = "en-AU_MadisonVoice"
    EN_AU_STEVE = "en-AU_SteveVoice"
    EN_GB_CHARLOTTE_V3 = "en-GB_CharlotteV3Voice"
    EN_GB_JAMES_V3 = "en-GB_JamesV3Voice"
    EN_GB_KATE_V3 = "en-GB_KateV3Voice"
    EN_US_ALLISON_V3 = "en-US_AllisonV3Voice"
    EN_US_EMILY_V3 = "en-US_EmilyV3Voice"
    EN_US_HENRY_V3 = "en-US_HenryV3Voice"
    EN_US_KEVIN_V3 = "en-US_KevinV3Voice"
    EN_US_LISA_V3 = "en-US_LisaV3Voice"
    EN_US_MICHAEL_V3 = "en-US_MichaelV3Voice"
    EN_US_OLIVIA_V3 = "en-US_OliviaV3Voice"
    ES_ES_ENRIQUE_V3 = "es-ES_EnriqueV3Voice"
    ES_ES_LAURA_V3 = "es-ES_LauraV3Voice"
    ES_LA_SOFIA_V3 = "es-LA_SofiaV3Voice"
    ES_US_SOFIA_V3 = "es-US_SofiaV3Voice"
    FR_CA_LOUISE_V3 = "fr-CA_LouiseV3Voice"
    FR_FR_NICOLAS_V3 = "fr-FR_NicolasV3Voice"
    FR_FR_RENEE_V3 = "fr-FR_ReneeV3Voice"
    IT_IT_FRANCESCA_V3 = "it-IT_FrancescaV3Voice"
    JA_JP_EMI_V3 = "ja-JP_EmiV3Voice"
    KO_KR_HYUNJUN = "ko-KR_HyunjunVoice"
    KO_KR_SI_WOO = "ko-KR_SiWooVoice"
    KO_KR_YOUNGMI = "ko-KR_YoungmiVoice"
    KO_KR_YUNA = "ko-KR_YunaVoice"
    NL_BE_ADELE = "nl-BE_AdeleVoice"
    NL_BE_BRAM = "nl-BE_BramVoice"
    NL_NL_EMMA = "nl-NL_EmmaVoice"
    NL_NL_LIAM = "nl-NL_LiamVoice"
    PT_BR_ISABELA_V3 = "pt-BR_IsabelaV3Voice"
    SV_SE_INGRID = "sv-SE_IngridVoice"
    ZH_CN_LI_NA = "zh-CN_LiNaVoice"
    ZH_CN_WANG_WEI = "zh-CN_WangWeiVoice"
    ZH_CN_ZHANG_JING = "zh-CN_ZhangJingVoice"

    @classmethod
    def default(cls) -> "WatsonVoice":
        return cls.EN_US_MICHAEL_V3

    @property
    def id(self) -> str:
        return self.value

    @property
    def language(self) -> str:
        """Language tag of the voice, e.g. "en-US"."""
        return self.value.split("_", 1)[0]

    def __str__(self) -> str:
        return self.value


class Language(str, Enum):
    """Languages a custom model can be created for."""
    AR_MS = "ar-MS"
    CS_CZ = "cs-CZ"
    DE_DE = "de-DE"
    EN_AU = "en-AU"
    EN_GB = "en-GB"
    EN_US = "en-US"
    ES_ES = "es-ES"
    ES_LA = "es-LA"
    ES_US = "es-US"
    FR_CA = "fr-CA"
    FR_FR = "fr-FR"
    IT_IT = "it-IT"
    JA_JP = "ja-JP"
    KO_KR = "ko-KR"
    NL_BE = "nl-BE"
    NL_NL = "nl-NL"
    PT_BR = "pt-BR"
    SV_SE = "sv-SE"
    ZH_CN = "zh-CN"

    @classmethod
    def default(cls) -> "Language":
        return cls.EN_US

    def __str__(self) -> str:
        return self.value


class PhonemeFormat(str, Enum):
    """Phoneme notation for pronunciations."""
    IBM = "ibm"
    IPA = "ipa"

    @classmethod
    def default(cls) -> "PhonemeFormat":
        return cls.IPA

    def __str__(self) -> str:
        return self.value
