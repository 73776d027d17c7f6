#!/usr/bin/env python3
"""
watson-speech Speech to Text Demo Script

Lists the available recognition models and, when given an audio file,
transcribes it.

Setup:
    Either pass --api-key / --service-url, or put them in .env:
       WATSON_STT_API_KEY=your_stt_key
       WATSON_STT_URL=https://api.eu-gb.speech-to-text.watson.cloud.ibm.com

Run:
    python demo_stt.py
    python demo_stt.py --audio sample.wav --model en-GB_BroadbandModel
"""

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

# Fix Windows console encoding
if sys.platform == 'win32':
    sys.stdout.reconfigure(encoding='utf-8')

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from config.config_loader import config_manager
from watson_speech import (
    HttpTransport,
    IamAuthenticator,
    MissingCredentialsError,
    SpeechToText,
    WatsonError,
)
from watson_speech.utils.logging import setup_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interact with the IBM Watson Speech to Text API")
    parser.add_argument("--api-key", "-a", help="API key for the Speech to Text instance")
    parser.add_argument("--service-url", "-s", help="The Watson service URL")
    parser.add_argument("--audio", help="Audio file to transcribe")
    parser.add_argument("--content-type", help="Audio content type (guessed from the file name if omitted)")
    parser.add_argument("--model", "-m", default=None, help="Recognition model (default: from config/watson.yaml)")
    parser.add_argument("--log-level", default=None, help="Logging level")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    try:
        settings = config_manager.env_settings
        config = config_manager.watson_config
    except (WatsonError, FileNotFoundError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    setup_logging(args.log_level or settings.log_level, settings.log_directory, settings.log_json)

    if args.api_key:
        api_key, service_url = args.api_key, settings.watson_stt_url
    else:
        try:
            api_key, service_url = settings.credentials_for(SpeechToText.SERVICE_NAME)
        except MissingCredentialsError as e:
            print(f"[ERROR] {e} (or pass --api-key)", file=sys.stderr)
            return 2
    service_url = args.service_url or service_url

    try:
        auth = await IamAuthenticator.create(
            api_key,
            url=config.auth.iam_url,
            transport=HttpTransport(timeout=config.auth.timeout),
        )
        stt = SpeechToText(
            auth,
            service_url,
            model=args.model or config.speech_to_text.model,
            content_type=config.speech_to_text.content_type,
            transport=HttpTransport(
                timeout=config.transport.timeout,
                connect_timeout=config.transport.connect_timeout,
            ),
            retry_config=config.speech_to_text.retry,
        )

        for model in await stt.list_models():
            print(f"{model.name:36s} {model.rate:>6d} Hz  {model.description}")

        if args.audio:
            audio_path = Path(args.audio)
            content_type = args.content_type or mimetypes.guess_type(audio_path.name)[0]
            result = await stt.transcribe_with_confidence(
                audio_path.read_bytes(),
                content_type=content_type,
            )
            print(f"\nTranscript ({result['confidence']:.2f}): {result['transcript']}")
    except WatsonError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    return 0


def main(argv=None) -> int:
    return asyncio.run(run(parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
