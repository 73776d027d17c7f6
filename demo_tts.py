#!/usr/bin/env python3
"""
watson-speech Text to Speech Demo Script

Lists the available voices, shows one voice in detail, and synthesizes
some text to an audio file.

Setup:
    Either pass --api-key / --service-url, or put them in .env:
       WATSON_TTS_API_KEY=your_tts_key
       WATSON_TTS_URL=https://api.eu-gb.text-to-speech.watson.cloud.ibm.com

Run:
    python demo_tts.py --text "Hello there" --output hello.ogg
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Fix Windows console encoding
if sys.platform == 'win32':
    sys.stdout.reconfigure(encoding='utf-8')

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from config.config_loader import config_manager
from watson_speech import (
    AudioFormat,
    HttpTransport,
    IamAuthenticator,
    MissingCredentialsError,
    TextToSpeech,
    WatsonError,
    WatsonVoice,
)
from watson_speech.utils.logging import setup_logging


# ANSI colors
class Colors:
    HEADER = '\033[95m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    RED = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


def print_header(text: str):
    print(f"\n{Colors.BOLD}{Colors.HEADER}{'='*60}{Colors.ENDC}")
    print(f"{Colors.BOLD}{Colors.HEADER}{text.center(60)}{Colors.ENDC}")
    print(f"{Colors.BOLD}{Colors.HEADER}{'='*60}{Colors.ENDC}\n")


def print_success(text: str):
    print(f"{Colors.GREEN}[SUCCESS]{Colors.ENDC} {text}")


def print_error(text: str):
    print(f"{Colors.RED}[ERROR]{Colors.ENDC} {text}", file=sys.stderr)


def print_info(text: str):
    print(f"{Colors.CYAN}[INFO]{Colors.ENDC} {text}")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interact with the IBM Watson Text to Speech API")
    parser.add_argument("--api-key", "-a", help="API key for the Text to Speech instance")
    parser.add_argument("--service-url", "-s", help="The Watson service URL")
    parser.add_argument("--text", "-t", required=True, help="The text you want synthesized")
    parser.add_argument(
        "--voice", "-v",
        default=None,
        choices=[voice.value for voice in WatsonVoice],
        metavar="VOICE",
        help="Voice ID, e.g. en-GB_KateV3Voice (default: from config/watson.yaml)",
    )
    parser.add_argument(
        "--format", "-f",
        default=None,
        help="Audio format, e.g. audio/wav;rate=22050 (default: from config/watson.yaml)",
    )
    parser.add_argument("--output", "-o", default="file.ogg", help="Output audio file")
    parser.add_argument("--log-level", default=None, help="Logging level")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    try:
        settings = config_manager.env_settings
        config = config_manager.watson_config
    except (WatsonError, FileNotFoundError) as e:
        print_error(str(e))
        return 2

    setup_logging(args.log_level or settings.log_level, settings.log_directory, settings.log_json)

    if args.api_key:
        api_key, service_url = args.api_key, settings.watson_tts_url
    else:
        try:
            api_key, service_url = settings.credentials_for(TextToSpeech.SERVICE_NAME)
        except MissingCredentialsError as e:
            print_error(f"{e} (or pass --api-key)")
            return 2
    service_url = args.service_url or service_url

    try:
        voice = WatsonVoice(args.voice or config.text_to_speech.voice)
        audio_format = AudioFormat.parse(args.format or config.text_to_speech.audio_format)
    except ValueError as e:
        print_error(f"Invalid voice or audio format: {e}")
        return 2

    transport = HttpTransport(
        timeout=config.transport.timeout,
        connect_timeout=config.transport.connect_timeout,
    )

    try:
        auth = await IamAuthenticator.create(
            api_key,
            url=config.auth.iam_url,
            transport=HttpTransport(timeout=config.auth.timeout),
        )
        tts = TextToSpeech(
            auth,
            service_url,
            voice=voice,
            transport=transport,
            retry_config=config.text_to_speech.retry,
        )

        print_header("Available voices")
        for listed in await tts.list_voices():
            print(f"  {listed.name:28s} {listed.gender:7s} {listed.description}")

        print_header(f"Voice {tts.voice.value}")
        print((await tts.get_voice()).model_dump_json(indent=2))

        print_info(f"Synthesizing {len(args.text)} characters as {audio_format.id}")
        audio = await tts.synthesize(args.text, audio_format=audio_format)
    except WatsonError as e:
        print_error(str(e))
        return 1

    output = Path(args.output)
    output.write_bytes(audio)
    print_success(f"Wrote {len(audio)} bytes to {output}")
    return 0


def main(argv=None) -> int:
    return asyncio.run(run(parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
