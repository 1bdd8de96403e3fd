"""Text -> keywords -> sentiment pipeline and the diary entry writer."""

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

import structlog

from .dictionary import WordDictionary, load_dictionary
from .feedback import generate_reply
from .keywords import ExtractOptions, KeywordExtractor, KeywordMatchSet
from .sentiment import SentimentEstimator, SentimentResult, SentimentThresholds
from .storage import EntryStore

logger = structlog.get_logger()


@dataclass(frozen=True)
class Analysis:
    matches: KeywordMatchSet
    sentiment: SentimentResult


class MoodAnalyzer:
    """Runs extraction and sentiment estimation over one shared dictionary."""

    def __init__(
        self,
        dictionary: Optional[WordDictionary] = None,
        extract_options: Optional[ExtractOptions] = None,
        thresholds: Optional[SentimentThresholds] = None,
    ):
        self.dictionary = dictionary if dictionary is not None else load_dictionary()
        self.extractor = KeywordExtractor(self.dictionary, extract_options)
        self.estimator = SentimentEstimator(self.dictionary, thresholds)

    def analyze(self, text) -> Analysis:
        matches = self.extractor.extract(text)
        return Analysis(matches=matches, sentiment=self.estimator.estimate(matches.weighted))


def analyze_text(text, dictionary: Optional[WordDictionary] = None) -> Analysis:
    """Analyze text with default options."""
    return MoodAnalyzer(dictionary).analyze(text)


class DiaryWriter:
    """Creates diary entries: analyze, record the day's mood, reply, save."""

    def __init__(
        self,
        store: EntryStore,
        analyzer: Optional[MoodAnalyzer] = None,
        reply_generator: Callable[[dict], str] = generate_reply,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.analyzer = analyzer or MoodAnalyzer()
        self.reply_generator = reply_generator
        self.clock = clock

    def write(self, text: str, day: Optional[date] = None) -> dict:
        """Analyze and persist a new entry.

        Args:
            text: Diary text
            day: Calendar day the entry belongs to (defaults to today); the
                entry timestamp combines it with the current clock time

        Returns:
            The saved entry dict

        Raises:
            ValueError: If text is blank or too long, or day is in the future
        """
        if not isinstance(text, str) or not text.strip():
            raise ValueError("Entry text is empty")

        now = self.clock()
        day = day or now.date()
        if day > now.date():
            raise ValueError(f"Cannot write an entry for a future date: {day.isoformat()}")

        text = text.strip()
        analysis = self.analyzer.analyze(text)
        sentiment = analysis.sentiment.to_dict()

        entry = {
            "id": uuid.uuid4().hex,
            "date": datetime.combine(day, now.time()).isoformat(),
            "text": text,
            "keywords": list(analysis.matches.keywords),
            "counts": dict(analysis.matches.counts),
            "weighted": dict(analysis.matches.weighted),
            "sentiment": sentiment,
        }
        entry["botReply"] = self.reply_generator(entry)

        self.store.save_entry(entry)
        # only stored entries set the day colour
        self.store.save_mood_color(day.isoformat(), sentiment["label"])
        logger.info(
            "entry_written",
            entry_id=entry["id"],
            label=sentiment["label"],
            keywords=len(entry["keywords"]),
        )
        return entry
