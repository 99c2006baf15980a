from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Tuple

from .models import (
    NEGATIVE,
    NEUTRAL,
    POSITIVE,
    FeatureSet,
    Metric,
    RatingLabels,
    Score3,
    Section,
    SubMetric,
    sum_scores,
)

Decide = Callable[[FeatureSet], str]


@dataclass(frozen=True)
class SubMetricRule:
    name: str
    ratings: RatingLabels
    decide: Decide
    analysis: Mapping[str, str]

    def evaluate(self, features: FeatureSet, ctx: Dict[str, Any]) -> SubMetric:
        level = self.decide(features)
        return SubMetric(
            name=self.name,
            ratings=self.ratings,
            active_rating=level,
            analysis=self.analysis[level].format(**ctx),
        )


@dataclass(frozen=True)
class MetricRule:
    """One metric: a single level decision drives score and narrative together."""

    name: str
    decide: Decide
    scores: Mapping[str, Score3]
    justification: Mapping[str, str]
    analysis: Mapping[str, str]
    sub_metrics: Tuple[SubMetricRule, ...] = ()

    def evaluate(self, features: FeatureSet) -> Metric:
        level = self.decide(features)
        ctx = features.template_context()
        return Metric(
            name=self.name,
            scores=self.scores[level],
            justification=self.justification[level].format(**ctx),
            analysis=self.analysis[level].format(**ctx),
            sub_metrics=tuple(s.evaluate(features, ctx) for s in self.sub_metrics),
        )


# --- level decisions ---

def articulation_level(f: FeatureSet) -> str:
    if f.filler_ratio > 0.05:
        return NEGATIVE
    if f.filler_ratio > 0.02:
        return NEUTRAL
    return POSITIVE


def vocal_confidence_level(f: FeatureSet) -> str:
    if f.confidence_ratio < 0.5:
        return NEGATIVE
    if f.confidence_ratio < 1.5:
        return NEUTRAL
    return POSITIVE


def voice_quality_level(f: FeatureSet) -> str:
    good_pacing = f.is_optimal_rate
    clear = f.clarity_score > 70
    if good_pacing and clear:
        return POSITIVE
    if good_pacing or clear:
        return NEUTRAL
    return NEGATIVE


def listening_level(f: FeatureSet) -> str:
    if f.listening_cue_count == 0:
        return NEGATIVE
    if f.listening_cue_count <= 2:
        return NEUTRAL
    return POSITIVE


def pacing_level(f: FeatureSet) -> str:
    if f.is_too_fast or f.is_too_slow:
        return NEGATIVE
    if f.is_optimal_rate and f.has_good_flow:
        return POSITIVE
    return NEUTRAL


def speech_rate_level(f: FeatureSet) -> str:
    if f.is_too_fast:
        return NEGATIVE
    if f.is_too_slow:
        return NEUTRAL
    return POSITIVE


def turn_management_level(f: FeatureSet) -> str:
    if f.interruption_count > 2:
        return NEGATIVE
    if f.is_smooth and f.is_balanced:
        return POSITIVE
    return NEUTRAL


def pause_level(f: FeatureSet) -> str:
    if f.pause_frequency_per_minute > 10:
        return NEGATIVE
    if f.pause_frequency_per_minute < 2:
        return NEUTRAL
    return POSITIVE


def silence_level(f: FeatureSet) -> str:
    if f.long_silence_count > 3:
        return NEGATIVE
    if f.long_silence_count > 0:
        return NEUTRAL
    return POSITIVE


def adaptability_level(f: FeatureSet) -> str:
    return POSITIVE if f.adaptability_phrase_count > 0 else NEUTRAL


def expressiveness_level(f: FeatureSet) -> str:
    return POSITIVE if f.emotional_word_count > 2 else NEUTRAL


def empathy_level(f: FeatureSet) -> str:
    if f.empathy_word_count > 3:
        return POSITIVE
    if f.empathy_word_count > 0:
        return NEUTRAL
    return NEGATIVE


def conflict_level(f: FeatureSet) -> str:
    if f.interruption_count > 2 and f.empathy_word_count == 0:
        return NEGATIVE
    if f.empathy_word_count > 0:
        return POSITIVE
    return NEUTRAL


def customer_centric_level(f: FeatureSet) -> str:
    if f.customer_centric_phrase_count > 2:
        return POSITIVE
    if f.customer_centric_phrase_count > 0:
        return NEUTRAL
    return NEGATIVE


def language_level(f: FeatureSet) -> str:
    if f.casual_word_count > f.professional_word_count:
        return NEGATIVE
    if f.professional_word_count > f.casual_word_count:
        return POSITIVE
    return NEUTRAL


def boundaries_level(f: FeatureSet) -> str:
    if f.familiarity_word_count > 0:
        return NEGATIVE
    if f.casual_word_count > f.professional_word_count:
        return NEUTRAL
    return POSITIVE


def demeanor_level(f: FeatureSet) -> str:
    if f.casual_word_count + f.familiarity_word_count > f.professional_word_count + 2:
        return NEGATIVE
    if f.professional_word_count >= 2:
        return POSITIVE
    return NEUTRAL


def knowledge_level(f: FeatureSet) -> str:
    if f.knowledge_phrase_count > 1:
        return POSITIVE
    if f.knowledge_phrase_count == 0 and f.uncertainty_word_count > f.confidence_word_count:
        return NEGATIVE
    return NEUTRAL


# --- taxonomy ---

ARTICULATION = MetricRule(
    name="Articulation and Clarity",
    decide=articulation_level,
    scores={NEGATIVE: Score3(1, 0, 0), NEUTRAL: Score3(0, 1, 0), POSITIVE: Score3(0, 0, 2)},
    justification={
        NEGATIVE: "High frequency of filler words detected ({filler_word_count} instances). "
        "Focus on reducing verbal hesitations for clearer communication.",
        NEUTRAL: "Moderate use of filler words observed ({filler_word_count} instances). "
        "Generally clear articulation with room for improvement.",
        POSITIVE: "Excellent articulation with minimal filler words ({filler_word_count} instances). "
        "Clear and professional speech delivery.",
    },
    analysis={
        NEGATIVE: "Filler words make up {filler_ratio:.1%} of speech, which interrupts the flow "
        "of explanations and weakens clarity.",
        NEUTRAL: "Speech clarity is adequate; filler words make up {filler_ratio:.1%} of speech "
        "and could be trimmed further.",
        POSITIVE: "Speech clarity analysis shows clear delivery with filler words at only "
        "{filler_ratio:.1%} of speech.",
    },
)

VOCAL_CONFIDENCE = MetricRule(
    name="Vocal Confidence",
    decide=vocal_confidence_level,
    scores={NEGATIVE: Score3(1, 0, 0), NEUTRAL: Score3(0, 1, 0), POSITIVE: Score3(0, 0, 1)},
    justification={
        NEGATIVE: "Language patterns suggest uncertainty. Consider using more definitive statements "
        "to convey confidence.",
        NEUTRAL: "Balanced use of confident and uncertain language. Shows appropriate caution while "
        "maintaining authority.",
        POSITIVE: "Strong confident language patterns. Demonstrates authority and expertise in "
        "communication.",
    },
    analysis={
        NEGATIVE: "Hedging phrases ({uncertainty_word_count}) outnumber confident statements "
        "({confidence_word_count}), which can undermine trust in the information given.",
        NEUTRAL: "Confident statements ({confidence_word_count}) and hedging phrases "
        "({uncertainty_word_count}) are roughly balanced, showing a measured professional tone.",
        POSITIVE: "Confident statements ({confidence_word_count}) clearly outweigh hedging phrases "
        "({uncertainty_word_count}), conveying competence throughout the interaction.",
    },
)

VOICE_QUALITY = MetricRule(
    name="Voice Quality",
    decide=voice_quality_level,
    scores={NEGATIVE: Score3(1, 0, 0), NEUTRAL: Score3(0, 1, 0), POSITIVE: Score3(0, 1, 3)},
    justification={
        NEGATIVE: "Voice quality assessment based on speech rate ({speaking_rate_wpm:.0f} WPM) and "
        "clarity metrics. Both pace and clarity need attention.",
        NEUTRAL: "Voice quality assessment based on speech rate ({speaking_rate_wpm:.0f} WPM) and "
        "clarity metrics. Either pace or clarity could be optimized.",
        POSITIVE: "Voice quality assessment based on speech rate ({speaking_rate_wpm:.0f} WPM) and "
        "clarity metrics. Optimal speaking pace maintained.",
    },
    analysis={
        NEGATIVE: "Overall voice quality is inconsistent, with pacing outside the optimal range and "
        "a clarity score of {clarity_score:.0f}.",
        NEUTRAL: "Overall voice quality is professional with a clarity score of {clarity_score:.0f}, "
        "though pacing and clarity are not both at their best.",
        POSITIVE: "Overall voice quality is excellent with consistent tone and good pacing "
        "(clarity score {clarity_score:.0f}).",
    },
)

LISTENING_CUES = SubMetricRule(
    name="Listening Cues",
    ratings=RatingLabels(negative="INFREQUENT", neutral="ADEQUATE", positive="FREQUENT"),
    decide=listening_level,
    analysis={
        NEGATIVE: "Agent uses {listening_cue_count} listening cues, leaving the customer without "
        "acknowledgment of what they said.",
        NEUTRAL: "Agent uses {listening_cue_count} listening cues, showing adequate engagement with "
        "customer communication.",
        POSITIVE: "Agent uses {listening_cue_count} listening cues, demonstrating strong active "
        "listening skills.",
    },
)

ACTIVE_LISTENING = MetricRule(
    name="Active Listening",
    decide=listening_level,
    scores={NEGATIVE: Score3(1, 0, 0), NEUTRAL: Score3(0, 1, 0), POSITIVE: Score3(0, 0, 2)},
    justification={
        NEGATIVE: "No listening cues were detected. The agent should acknowledge customer statements "
        "before moving on.",
        NEUTRAL: "Agent demonstrates active listening skills by addressing customer concerns, though "
        "could benefit from more active listening techniques.",
        POSITIVE: "Agent demonstrates active listening skills by frequently using listening cues and "
        "responding appropriately to customer needs.",
    },
    analysis={
        NEGATIVE: "The conversation shows little evidence of active listening; customer input is "
        "rarely acknowledged.",
        NEUTRAL: "The agent responds to customer concerns and maintains engagement throughout the "
        "conversation.",
        POSITIVE: "The agent directly addresses the prospect's needs and uses appropriate listening "
        "cues.",
    },
    sub_metrics=(LISTENING_CUES,),
)

SPEECH_RATE = SubMetricRule(
    name="Speech Rate",
    ratings=RatingLabels(negative="TOO FAST", neutral="TOO SLOW", positive="APPROPRIATE"),
    decide=speech_rate_level,
    analysis={
        NEGATIVE: "Speaking rate of {speaking_rate_wpm:.0f} words per minute is faster than optimal - "
        "consider slowing down for better comprehension.",
        NEUTRAL: "Speaking rate of {speaking_rate_wpm:.0f} words per minute is slower than optimal - "
        "consider increasing pace for more dynamic delivery.",
        POSITIVE: "Speaking rate of {speaking_rate_wpm:.0f} words per minute is within an acceptable "
        "range for clear communication ({speaking_rate_source}).",
    },
)

TURN_MANAGEMENT = SubMetricRule(
    name="Turn Management",
    ratings=RatingLabels(negative="INTERRUPTING", neutral="BALANCED", positive="SMOOTH"),
    decide=turn_management_level,
    analysis={
        NEGATIVE: "Turn management shows {interruption_count} interruptions, cutting across the "
        "customer's turns.",
        NEUTRAL: "Turn management shows adequate conversation flow with balanced participation "
        "(agent share {agent_turn_ratio:.0f}%).",
        POSITIVE: "Turn management shows smooth transitions and appropriate conversation balance.",
    },
)

PACING = MetricRule(
    name="Pacing and Turn Taking",
    decide=pacing_level,
    scores={NEGATIVE: Score3(1, 0, 0), NEUTRAL: Score3(0, 1, 1), POSITIVE: Score3(0, 0, 2)},
    justification={
        NEGATIVE: "Agent speaks at {speaking_rate_wpm:.0f} WPM, outside the comfortable range for "
        "phone conversations.",
        NEUTRAL: "Agent maintains a variable speech rate and adequate turn management throughout the "
        "conversation.",
        POSITIVE: "Agent maintains an appropriate speech rate and good turn management throughout "
        "the conversation.",
    },
    analysis={
        NEGATIVE: "The agent's pacing makes the conversation harder to follow; adjusting speech rate "
        "would allow a more natural flow.",
        NEUTRAL: "The agent maintains adequate pacing with room for improvement in speech rate "
        "consistency, allowing for natural conversation flow.",
        POSITIVE: "The agent maintains an appropriate speech rate and demonstrates good turn "
        "management, allowing for natural conversation flow.",
    },
    sub_metrics=(SPEECH_RATE, TURN_MANAGEMENT),
)

PAUSE_USAGE = SubMetricRule(
    name="Pause Usage",
    ratings=RatingLabels(negative="INEFFECTIVE", neutral="ADEQUATE", positive="EFFECTIVE"),
    decide=pause_level,
    analysis={
        NEGATIVE: "Pause frequency of {pause_frequency_per_minute:.1f} per minute is higher than "
        "optimal - consider reducing unnecessary pauses.",
        NEUTRAL: "Pause frequency of {pause_frequency_per_minute:.1f} per minute could be increased "
        "for better emphasis and clarity.",
        POSITIVE: "Pause frequency of {pause_frequency_per_minute:.1f} per minute is appropriate for "
        "effective communication.",
    },
)

SILENCE_HANDLING = SubMetricRule(
    name="Silence Handling",
    ratings=RatingLabels(negative="AWKWARD", neutral="ACCEPTABLE", positive="COMFORTABLE"),
    decide=silence_level,
    analysis={
        NEGATIVE: "{long_silence_count} long silences were detected; dead air should be filled with "
        "status updates.",
        NEUTRAL: "{long_silence_count} long silence(s) detected, handled acceptably within the flow "
        "of the call.",
        POSITIVE: "Comfortable handling of natural conversation silences, allowing for thoughtful "
        "responses and processing time.",
    },
)

PAUSES = MetricRule(
    name="Pauses and Silence",
    decide=pause_level,
    scores={NEGATIVE: Score3(1, 0, 0), NEUTRAL: Score3(0, 1, 0), POSITIVE: Score3(0, 0, 2)},
    justification={
        NEGATIVE: "Frequent pauses ({pause_frequency_per_minute:.1f} per minute) break up the "
        "delivery and suggest hesitation.",
        NEUTRAL: "Few deliberate pauses were detected; strategic pauses would give the customer more "
        "room to respond.",
        POSITIVE: "Strategic use of pauses and comfortable handling of natural conversation silences "
        "demonstrates professional communication skills.",
    },
    analysis={
        NEGATIVE: "The agent pauses more than necessary, which can come across as uncertainty.",
        NEUTRAL: "The agent keeps talking with few pauses, leaving little time for the prospect to "
        "absorb information.",
        POSITIVE: "The agent uses silence effectively, allowing the prospect time to understand the "
        "information and respond thoughtfully.",
    },
    sub_metrics=(PAUSE_USAGE, SILENCE_HANDLING),
)

ADAPTABILITY = MetricRule(
    name="Adaptability",
    decide=adaptability_level,
    scores={NEUTRAL: Score3(0, 1, 0), POSITIVE: Score3(0, 0, 2)},
    justification={
        NEUTRAL: "No explicit change of approach was detected; the agent kept to a single line of "
        "explanation.",
        POSITIVE: "Agent demonstrates adaptability in communication approach based on customer "
        "responses ({adaptability_phrase_count} reframing phrases).",
    },
    analysis={
        NEUTRAL: "Communication style stays consistent; offering an alternative explanation could "
        "help when the customer hesitates.",
        POSITIVE: "Shows good adaptability in communication style, adjusting approach based on "
        "customer feedback and conversation flow.",
    },
)

EXPRESSIVENESS = MetricRule(
    name="Emotional Expressiveness",
    decide=expressiveness_level,
    scores={NEUTRAL: Score3(0, 1, 0), POSITIVE: Score3(0, 0, 2)},
    justification={
        NEUTRAL: "Limited emotional expression ({emotional_word_count} emotional words); tone stays "
        "neutral and businesslike.",
        POSITIVE: "Appropriate emotional expression ({emotional_word_count} emotional words) that "
        "matches the conversation context.",
    },
    analysis={
        NEUTRAL: "Demonstrates a reserved emotional register; adding warmth could strengthen the "
        "connection with the customer.",
        POSITIVE: "Demonstrates appropriate emotional expression that aligns with professional "
        "communication standards and conversation context.",
    },
)

EMPATHY = MetricRule(
    name="Empathy and Rapport",
    decide=empathy_level,
    scores={NEGATIVE: Score3(1, 0, 0), NEUTRAL: Score3(0, 1, 0), POSITIVE: Score3(0, 0, 2)},
    justification={
        NEGATIVE: "No empathy markers were detected. Acknowledging the customer's situation would "
        "help build rapport.",
        NEUTRAL: "Some empathetic language observed ({empathy_word_count} instances). Rapport could "
        "be strengthened further.",
        POSITIVE: "Shows understanding and builds rapport with the customer through empathetic "
        "communication ({empathy_word_count} instances).",
    },
    analysis={
        NEGATIVE: "The agent focuses on the process without recognizing the customer's perspective.",
        NEUTRAL: "The agent occasionally recognizes the customer's perspective while addressing "
        "their needs.",
        POSITIVE: "Effectively demonstrates empathy and builds rapport through understanding "
        "customer perspective and addressing their needs.",
    },
)

CONFLICT = MetricRule(
    name="Conflict Management",
    decide=conflict_level,
    scores={NEGATIVE: Score3(1, 0, 0), NEUTRAL: Score3(0, 1, 0), POSITIVE: Score3(0, 1, 1)},
    justification={
        NEGATIVE: "Repeated interruptions ({interruption_count}) without any de-escalating language "
        "suggest friction was not managed.",
        NEUTRAL: "No conflict signals or de-escalation language were detected in the conversation.",
        POSITIVE: "Handles potential conflicts with professionalism and demonstrates effective "
        "de-escalation techniques when needed.",
    },
    analysis={
        NEGATIVE: "Tension in the exchange was met with interruptions rather than acknowledgment.",
        NEUTRAL: "The conversation remained calm; conflict management was not tested.",
        POSITIVE: "Demonstrates effective conflict management through professional communication "
        "and appropriate de-escalation strategies.",
    },
)

CUSTOMER_CENTRIC = MetricRule(
    name="Customer Centric Approach",
    decide=customer_centric_level,
    scores={NEGATIVE: Score3(1, 0, 0), NEUTRAL: Score3(0, 1, 0), POSITIVE: Score3(0, 0, 2)},
    justification={
        NEGATIVE: "No customer-focused phrasing was detected; the conversation centers on the "
        "agent's script.",
        NEUTRAL: "Some customer-focused phrasing ({customer_centric_phrase_count} instances) keeps "
        "attention on the customer's needs.",
        POSITIVE: "Maintains focus on customer needs and satisfaction throughout the interaction "
        "({customer_centric_phrase_count} instances).",
    },
    analysis={
        NEGATIVE: "The agent should frame offers around the customer's needs rather than the process.",
        NEUTRAL: "The agent acknowledges customer needs at points but could prioritize them more "
        "consistently.",
        POSITIVE: "Consistently demonstrates customer-centric approach by prioritizing customer needs "
        "and maintaining focus on satisfaction.",
    },
)

LANGUAGE = MetricRule(
    name="Language Appropriateness",
    decide=language_level,
    scores={NEGATIVE: Score3(1, 0, 0), NEUTRAL: Score3(0, 1, 0), POSITIVE: Score3(0, 0, 3)},
    justification={
        NEGATIVE: "Casual expressions ({casual_word_count}) outnumber professional language "
        "({professional_word_count}).",
        NEUTRAL: "Professional ({professional_word_count}) and casual ({casual_word_count}) language "
        "are evenly matched.",
        POSITIVE: "Uses professional and appropriate language throughout the conversation "
        "({professional_word_count} professional markers).",
    },
    analysis={
        NEGATIVE: "Vocabulary leans informal for a business call; replacing casual terms would "
        "improve perceived professionalism.",
        NEUTRAL: "Vocabulary is acceptable but mixes registers; more courtesy phrases would lift the "
        "tone.",
        POSITIVE: "Maintains professional language standards with appropriate vocabulary and tone for "
        "business communication context.",
    },
)

BOUNDARIES = MetricRule(
    name="Personal Boundaries",
    decide=boundaries_level,
    scores={NEGATIVE: Score3(1, 0, 0), NEUTRAL: Score3(0, 1, 0), POSITIVE: Score3(0, 0, 1)},
    justification={
        NEGATIVE: "Over-familiar forms of address were used ({familiarity_word_count} instances).",
        NEUTRAL: "No over-familiar address, but the overall register is casual.",
        POSITIVE: "Maintains appropriate professional boundaries while creating a personable and "
        "approachable interaction experience.",
    },
    analysis={
        NEGATIVE: "Terms of endearment or slang address cross professional boundaries with the "
        "customer.",
        NEUTRAL: "Boundaries are respected, though a more formal register would be safer.",
        POSITIVE: "Successfully maintains professional boundaries while creating personable and "
        "approachable customer interaction.",
    },
)

DEMEANOR = MetricRule(
    name="Professional Demeanor",
    decide=demeanor_level,
    scores={NEGATIVE: Score3(1, 0, 0), NEUTRAL: Score3(0, 1, 0), POSITIVE: Score3(0, 0, 1)},
    justification={
        NEGATIVE: "Informal language clearly dominates courtesy expressions in the conversation.",
        NEUTRAL: "Demeanor is neutral with few explicit courtesy expressions "
        "({professional_word_count}).",
        POSITIVE: "Consistently maintains professional demeanor and demonstrates good business "
        "etiquette throughout the interaction.",
    },
    analysis={
        NEGATIVE: "The agent's informal manner detracts from a professional impression.",
        NEUTRAL: "The agent is polite but could use more courtesy phrases such as please and thank "
        "you.",
        POSITIVE: "Demonstrates consistent professional demeanor with good business etiquette and "
        "appropriate communication style.",
    },
)

KNOWLEDGE = MetricRule(
    name="Professional Knowledge",
    decide=knowledge_level,
    scores={NEGATIVE: Score3(1, 0, 0), NEUTRAL: Score3(0, 1, 0), POSITIVE: Score3(0, 0, 2)},
    justification={
        NEGATIVE: "No references to policy or records, and hedging outweighs confident statements.",
        NEUTRAL: "Few explicit references to policy, records or procedure "
        "({knowledge_phrase_count}).",
        POSITIVE: "Displays good knowledge of products, services, and company policies "
        "({knowledge_phrase_count} references).",
    },
    analysis={
        NEGATIVE: "The agent appears unsure of the details; grounding answers in records or policy "
        "would build credibility.",
        NEUTRAL: "Shows adequate professional knowledge; citing records or policy more often would "
        "reinforce accuracy.",
        POSITIVE: "Shows strong professional knowledge with good understanding of products, "
        "services, and company procedures.",
    },
)

SCORECARD_RULES: Tuple[Tuple[str, Tuple[MetricRule, ...]], ...] = (
    ("Vocal Characteristics", (ARTICULATION, VOCAL_CONFIDENCE, VOICE_QUALITY)),
    ("Conversation Flow", (ACTIVE_LISTENING, PACING, PAUSES)),
    ("Emotional Intelligence and Adaptability", (ADAPTABILITY, EXPRESSIVENESS, EMPATHY)),
    (
        "Professionalism and Etiquette",
        (CONFLICT, CUSTOMER_CENTRIC, LANGUAGE, BOUNDARIES, DEMEANOR, KNOWLEDGE),
    ),
)


def build_section(name: str, metrics: Tuple[Metric, ...]) -> Section:
    # Section totals are the sum of their metrics, never re-derived from features.
    return Section(name=name, scores=sum_scores(m.scores for m in metrics), metrics=metrics)


def score_features(features: FeatureSet) -> Tuple[Section, ...]:
    """Map a FeatureSet onto the full scorecard."""
    return tuple(
        build_section(name, tuple(rule.evaluate(features) for rule in rules))
        for name, rules in SCORECARD_RULES
    )
