"""Built-in English narrative corpus.

Text bodies use ``{{A}}`` / ``{{B}}`` for the two display names.  The
felt-experience texts are written with the bare subject tokens ``A`` and
``B`` instead, which the renderer rewrites for that section only.

Loop texts are one step per line; trigger texts are one "• " bullet per line.
"""

from __future__ import annotations

from app.narrative.comparator import Direction, Relation
from app.narrative.dimensions import ANCHOR_DIMENSION, DimensionKey
from app.narrative.templates import Scope, Section, Template, Variance

STICKINESS = DimensionKey.STICKINESS
PAST = DimensionKey.PAST_BROODING
FUTURE = DimensionKey.FUTURE_WORRY
INTERPERSONAL = DimensionKey.INTERPERSONAL

SIMILAR = Relation.SIMILAR
DIFFERENT = Relation.DIFFERENT
VERY_DIFFERENT = Relation.VERY_DIFFERENT

A_HIGHER = Direction.A_HIGHER
B_HIGHER = Direction.B_HIGHER
NO_DIRECTION = Direction.NONE


def _t(
    template_id: str,
    section: Section,
    dimension: DimensionKey,
    text: str,
    relation: Relation = SIMILAR,
    direction: Direction = NO_DIRECTION,
    variance: Variance = Variance.NONE,
    scope: Scope = Scope.DIMENSION,
) -> Template:
    return Template(
        id=template_id,
        section=section,
        dimension=dimension,
        relation=relation,
        direction=direction,
        variance=variance,
        scope=scope,
        text=text,
    )


def _lines(*lines: str) -> str:
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# A: dominant difference (one per dimension)
# ---------------------------------------------------------------------------
_DOMINANT_DIFFERENCE = [
    _t("A01_stickiness", Section.DOMINANT_DIFFERENCE, STICKINESS, _lines(
        "The clearest difference between {{A}} and {{B}} shows up in how long a thought stays with each of you.",
        "When something is left unresolved, one mind tends to keep circling back to it while the other moves on sooner.",
        "Neither way is right or wrong; they simply run at different speeds.",
    )),
    _t("A02_past_brooding", Section.DOMINANT_DIFFERENCE, PAST, _lines(
        "The clearest difference between {{A}} and {{B}} shows up in how each of you carries what has already happened.",
        "One mind tends to return to past events and go over them again, while the other files them away more quickly.",
        "This shapes how each of you talks about old disagreements.",
    )),
    _t("A03_future_worry", Section.DOMINANT_DIFFERENCE, FUTURE, _lines(
        "The clearest difference between {{A}} and {{B}} shows up in how each of you meets an uncertain future.",
        "One mind tends to run ahead and rehearse what could go wrong, while the other waits to see what actually happens.",
        "Plans, deadlines and open questions bring this out most.",
    )),
    _t("A04_interpersonal", Section.DOMINANT_DIFFERENCE, INTERPERSONAL, _lines(
        "The clearest difference between {{A}} and {{B}} shows up in how each of you reads other people's behaviour.",
        "One mind tends to look for hidden meaning in a tone or a silence, while the other takes things more at face value.",
        "Small everyday signals can therefore land very differently for each of you.",
    )),
]

# ---------------------------------------------------------------------------
# A99: global safety
# ---------------------------------------------------------------------------
_GLOBAL_SAFETY = [
    _t("A99_global_safety", Section.SAFETY, ANCHOR_DIMENSION, _lines(
        "This comparison describes tendencies, not fixed traits or a verdict on your relationship.",
        "Minds change with context, mood and time, and differences are often where understanding starts.",
    ), scope=Scope.GLOBAL_SAFETY),
]

# ---------------------------------------------------------------------------
# B: mental map (dimension x relation)
# ---------------------------------------------------------------------------
_MENTAL_MAP = [
    _t("B01_stickiness_similar", Section.MENTAL_MAP, STICKINESS,
       "{{A}} and {{B}} let go of thoughts at a similar pace."),
    _t("B02_stickiness_different", Section.MENTAL_MAP, STICKINESS,
       "{{A}} and {{B}} differ somewhat in how long a thought stays with them.",
       relation=DIFFERENT),
    _t("B03_stickiness_very_different", Section.MENTAL_MAP, STICKINESS,
       "{{A}} and {{B}} differ clearly in how long a thought stays with them.",
       relation=VERY_DIFFERENT),
    _t("B04_past_brooding_similar", Section.MENTAL_MAP, PAST,
       "{{A}} and {{B}} relate to past events in a similar way."),
    _t("B05_past_brooding_different", Section.MENTAL_MAP, PAST,
       "{{A}} and {{B}} differ somewhat in how often they return to the past.",
       relation=DIFFERENT),
    _t("B06_past_brooding_very_different", Section.MENTAL_MAP, PAST,
       "{{A}} and {{B}} differ clearly in how often they return to the past.",
       relation=VERY_DIFFERENT),
    _t("B07_future_worry_similar", Section.MENTAL_MAP, FUTURE,
       "{{A}} and {{B}} face an uncertain future in a similar way."),
    _t("B08_future_worry_different", Section.MENTAL_MAP, FUTURE,
       "{{A}} and {{B}} differ somewhat in how much they worry ahead.",
       relation=DIFFERENT),
    _t("B09_future_worry_very_different", Section.MENTAL_MAP, FUTURE,
       "{{A}} and {{B}} differ clearly in how much they worry ahead.",
       relation=VERY_DIFFERENT),
    _t("B10_interpersonal_similar", Section.MENTAL_MAP, INTERPERSONAL,
       "{{A}} and {{B}} read other people's behaviour in a similar way."),
    _t("B11_interpersonal_different", Section.MENTAL_MAP, INTERPERSONAL,
       "{{A}} and {{B}} differ somewhat in how they interpret other people's behaviour.",
       relation=DIFFERENT),
    _t("B12_interpersonal_very_different", Section.MENTAL_MAP, INTERPERSONAL,
       "{{A}} and {{B}} differ clearly in how they interpret other people's behaviour.",
       relation=VERY_DIFFERENT),
]

# ---------------------------------------------------------------------------
# C: key differences (relation "different" only; very different has none)
# ---------------------------------------------------------------------------
_KEY_DIFFERENCES = [
    _t("C01_stickiness_A_higher", Section.KEY_DIFFERENCES, STICKINESS, _lines(
        "In unresolved situations, {{A}} usually stays with a thought or topic for longer,",
        "while {{B}} finds it easier to move past it and turn to the next thing.",
        "One of you may feel the matter is still open while the other feels it is time to move on.",
    ), relation=DIFFERENT, direction=A_HIGHER),
    _t("C02_stickiness_B_higher", Section.KEY_DIFFERENCES, STICKINESS, _lines(
        "In unresolved situations, {{B}} usually stays with a thought or topic for longer,",
        "while {{A}} finds it easier to move past it and turn to the next thing.",
        "One of you may feel the matter is still open while the other feels it is time to move on.",
    ), relation=DIFFERENT, direction=B_HIGHER),
    _t("C03_stickiness_mixed", Section.KEY_DIFFERENCES, STICKINESS, _lines(
        "The difference in how long thoughts stay with {{A}} and {{B}} is not one-sided.",
        "Depending on the topic, either of you can be the one who holds on or the one who lets go first.",
    ), relation=DIFFERENT, variance=Variance.MIXED),
    _t("C04_past_brooding_A_higher", Section.KEY_DIFFERENCES, PAST, _lines(
        "{{A}} tends to go back over past events more often and look at them again,",
        "while {{B}} usually leaves them behind sooner.",
        "Old conversations may therefore feel finished to one of you and still alive to the other.",
    ), relation=DIFFERENT, direction=A_HIGHER),
    _t("C05_past_brooding_B_higher", Section.KEY_DIFFERENCES, PAST, _lines(
        "{{B}} tends to go back over past events more often and look at them again,",
        "while {{A}} usually leaves them behind sooner.",
        "Old conversations may therefore feel finished to one of you and still alive to the other.",
    ), relation=DIFFERENT, direction=B_HIGHER),
    _t("C06_past_brooding_mixed", Section.KEY_DIFFERENCES, PAST, _lines(
        "How {{A}} and {{B}} carry the past differs, but not always in the same direction.",
        "Some memories stay with one of you, other memories with the other.",
    ), relation=DIFFERENT, variance=Variance.MIXED),
    _t("C07_future_worry_A_higher", Section.KEY_DIFFERENCES, FUTURE, _lines(
        "{{A}} is more likely to think ahead about what might go wrong,",
        "while {{B}} tends to deal with the future when it arrives.",
        "Planning together can feel reassuring to one of you and heavy to the other.",
    ), relation=DIFFERENT, direction=A_HIGHER),
    _t("C08_future_worry_B_higher", Section.KEY_DIFFERENCES, FUTURE, _lines(
        "{{B}} is more likely to think ahead about what might go wrong,",
        "while {{A}} tends to deal with the future when it arrives.",
        "Planning together can feel reassuring to one of you and heavy to the other.",
    ), relation=DIFFERENT, direction=B_HIGHER),
    _t("C09_future_worry_mixed", Section.KEY_DIFFERENCES, FUTURE, _lines(
        "{{A}} and {{B}} worry about the future differently, and who worries more depends on the situation.",
        "Work, money and health may each bring out a different pattern.",
    ), relation=DIFFERENT, variance=Variance.MIXED),
    _t("C10_interpersonal_A_higher", Section.KEY_DIFFERENCES, INTERPERSONAL, _lines(
        "{{A}} tends to notice small shifts in other people's tone or behaviour and wonder what they mean,",
        "while {{B}} usually takes them as they come.",
        "A short reply can therefore carry a message for one of you and be just a short reply for the other.",
    ), relation=DIFFERENT, direction=A_HIGHER),
    _t("C11_interpersonal_B_higher", Section.KEY_DIFFERENCES, INTERPERSONAL, _lines(
        "{{B}} tends to notice small shifts in other people's tone or behaviour and wonder what they mean,",
        "while {{A}} usually takes them as they come.",
        "A short reply can therefore carry a message for one of you and be just a short reply for the other.",
    ), relation=DIFFERENT, direction=B_HIGHER),
    _t("C12_interpersonal_mixed", Section.KEY_DIFFERENCES, INTERPERSONAL, _lines(
        "{{A}} and {{B}} read other people differently, though not always in the same direction.",
        "With some people one of you is more watchful, with others it is the other way round.",
    ), relation=DIFFERENT, variance=Variance.MIXED),
]

# ---------------------------------------------------------------------------
# D: loop (dimension x {different, very different}); one step per line
# ---------------------------------------------------------------------------
_LOOP = [
    _t("D01_stickiness_different", Section.LOOP, STICKINESS, _lines(
        "Something is left open or unclear.",
        "One mind stays with it a little longer, the other moves on.",
        "One of you feels the matter was dropped too early.",
        "The other feels it is being dragged out.",
    ), relation=DIFFERENT),
    _t("D02_stickiness_very_different", Section.LOOP, STICKINESS, _lines(
        "Something is left open or unclear.",
        "One mind keeps returning to it, the other has already let it go.",
        "The one still holding on brings it up again.",
        "The one who moved on feels pulled backwards and pulls away.",
        "The distance makes the open matter feel even bigger.",
    ), relation=VERY_DIFFERENT),
    _t("D03_past_brooding_different", Section.LOOP, PAST, _lines(
        "A past event comes up in conversation.",
        "One of you wants to look at it again, the other thinks it is settled.",
        "One feels unheard, the other feels stuck in the past.",
    ), relation=DIFFERENT),
    _t("D04_past_brooding_very_different", Section.LOOP, PAST, _lines(
        "A past event comes up in conversation.",
        "One mind replays it in detail, the other barely remembers it as important.",
        "The replaying mind feels the event is being brushed aside.",
        "The other feels blamed for something long finished.",
        "Both become more guarded the next time the past comes up.",
    ), relation=VERY_DIFFERENT),
    _t("D05_future_worry_different", Section.LOOP, FUTURE, _lines(
        "A decision about the future needs to be made.",
        "One of you starts listing what could go wrong, the other wants to wait and see.",
        "One feels alone with the worry, the other feels the worry is too much.",
    ), relation=DIFFERENT),
    _t("D06_future_worry_very_different", Section.LOOP, FUTURE, _lines(
        "A decision about the future needs to be made.",
        "One mind races through every risk, the other sees little reason for concern.",
        "The worried mind pushes for more planning.",
        "The calmer mind reassures, which can sound like dismissal.",
        "The worry grows because it does not feel shared.",
    ), relation=VERY_DIFFERENT),
    _t("D07_interpersonal_different", Section.LOOP, INTERPERSONAL, _lines(
        "Someone's tone or behaviour is a little unclear.",
        "One of you reads a meaning into it, the other does not.",
        "One feels their concern is not taken seriously, the other feels it is overthought.",
    ), relation=DIFFERENT),
    _t("D08_interpersonal_very_different", Section.LOOP, INTERPERSONAL, _lines(
        "Someone's tone or behaviour is a little unclear.",
        "One mind sees a clear message in it, the other sees nothing at all.",
        "The first asks what was really meant.",
        "The second feels questioned or misread.",
        "Each becomes more certain of their own reading.",
    ), relation=VERY_DIFFERENT),
]

# ---------------------------------------------------------------------------
# E: felt experience (bare A / B subject tokens)
# ---------------------------------------------------------------------------
_FELT_EXPERIENCE = [
    _t("E01_stickiness_A_higher", Section.FELT_EXPERIENCE, STICKINESS, _lines(
        "A may feel that some matters are still unfinished and need more time in mind.",
        "B may feel that moving on is more natural and less of a strain.",
    ), relation=DIFFERENT, direction=A_HIGHER),
    _t("E02_stickiness_B_higher", Section.FELT_EXPERIENCE, STICKINESS, _lines(
        "B may feel that some matters are still unfinished and need more time in mind.",
        "A may feel that moving on is more natural and less of a strain.",
    ), relation=DIFFERENT, direction=B_HIGHER),
    _t("E03_past_brooding_A_higher", Section.FELT_EXPERIENCE, PAST, _lines(
        "A may feel that past events still matter and deserve another look.",
        "B may feel that going back over them takes energy away from the present.",
    ), relation=DIFFERENT, direction=A_HIGHER),
    _t("E04_past_brooding_B_higher", Section.FELT_EXPERIENCE, PAST, _lines(
        "B may feel that past events still matter and deserve another look.",
        "A may feel that going back over them takes energy away from the present.",
    ), relation=DIFFERENT, direction=B_HIGHER),
    _t("E05_future_worry_A_higher", Section.FELT_EXPERIENCE, FUTURE, _lines(
        "A may feel safer when possible problems have been thought through in advance.",
        "B may feel that too much thinking ahead makes things heavier than they are.",
    ), relation=DIFFERENT, direction=A_HIGHER),
    _t("E06_future_worry_B_higher", Section.FELT_EXPERIENCE, FUTURE, _lines(
        "B may feel safer when possible problems have been thought through in advance.",
        "A may feel that too much thinking ahead makes things heavier than they are.",
    ), relation=DIFFERENT, direction=B_HIGHER),
    _t("E07_interpersonal_A_higher", Section.FELT_EXPERIENCE, INTERPERSONAL, _lines(
        "A may feel that small signals from others carry real meaning and should not be ignored.",
        "B may feel that reading too much into them creates problems that are not there.",
    ), relation=DIFFERENT, direction=A_HIGHER),
    _t("E08_interpersonal_B_higher", Section.FELT_EXPERIENCE, INTERPERSONAL, _lines(
        "B may feel that small signals from others carry real meaning and should not be ignored.",
        "A may feel that reading too much into them creates problems that are not there.",
    ), relation=DIFFERENT, direction=B_HIGHER),
]

# ---------------------------------------------------------------------------
# F01–F04: triggers; F05–F08: standard per-dimension safety
# ---------------------------------------------------------------------------
_TRIGGERS = [
    _t("F01_stickiness_triggers", Section.TRIGGERS, STICKINESS, _lines(
        "• After an argument or conversation that did not reach an end",
        "• When a topic feels finished to one of you but not to the other",
        "• Under time pressure or mental tiredness",
        "• When one of you wants to move quickly and the other pauses",
    ), relation=DIFFERENT, variance=Variance.MIXED),
    _t("F02_past_brooding_triggers", Section.TRIGGERS, PAST, _lines(
        "• Anniversaries, old photos or familiar places",
        "• When a past mistake is mentioned, even in passing",
        "• Conversations that start with \"remember when\"",
        "• When a current problem resembles an old one",
    ), relation=DIFFERENT, variance=Variance.MIXED),
    _t("F03_future_worry_triggers", Section.TRIGGERS, FUTURE, _lines(
        "• Big decisions about money, work or moving",
        "• Plans with many unknowns",
        "• Waiting for news or results",
        "• When one of you changes a plan at short notice",
    ), relation=DIFFERENT, variance=Variance.MIXED),
    _t("F04_interpersonal_triggers", Section.TRIGGERS, INTERPERSONAL, _lines(
        "• Short or delayed replies to messages",
        "• A change in someone's tone without explanation",
        "• Social situations with people you do not know well",
        "• Feedback or criticism given in front of others",
    ), relation=DIFFERENT, variance=Variance.MIXED),
]

_SAFETY = [
    _t("F05_stickiness_safety", Section.SAFETY, STICKINESS, _lines(
        "How long a thought stays with someone depends a lot on tiredness, stress and the topic itself.",
        "These results describe a tendency, not a fixed rule about either of you.",
    )),
    _t("F06_past_brooding_safety", Section.SAFETY, PAST, _lines(
        "Returning to the past can be a way of making sense of it, and letting it go can be a way of protecting the present.",
        "These results describe a tendency, not a judgement of either approach.",
    )),
    _t("F07_future_worry_safety", Section.SAFETY, FUTURE, _lines(
        "Thinking ahead and staying in the present both have their place.",
        "These results describe a tendency that can shift with circumstances.",
    )),
    _t("F08_interpersonal_safety", Section.SAFETY, INTERPERSONAL, _lines(
        "Reading other people is shaped by history, culture and the relationship itself.",
        "These results describe a tendency, not how either of you will react in every case.",
    )),
]

# ---------------------------------------------------------------------------
# H: low-confidence safety (per dimension and global)
# ---------------------------------------------------------------------------
_LOW_CONFIDENCE = [
    _t("H01_stickiness_low_confidence", Section.SAFETY, STICKINESS, _lines(
        "Part of this comparison is based on incomplete answers.",
        "What it says about how thoughts are let go of is a first impression rather than a clear picture.",
    ), variance=Variance.MIXED),
    _t("H02_past_brooding_low_confidence", Section.SAFETY, PAST, _lines(
        "Part of this comparison is based on incomplete answers.",
        "What it says about how the past is carried is a first impression rather than a clear picture.",
    ), variance=Variance.MIXED),
    _t("H03_future_worry_low_confidence", Section.SAFETY, FUTURE, _lines(
        "Part of this comparison is based on incomplete answers.",
        "What it says about worry for the future is a first impression rather than a clear picture.",
    ), variance=Variance.MIXED),
    _t("H04_interpersonal_low_confidence", Section.SAFETY, INTERPERSONAL, _lines(
        "Part of this comparison is based on incomplete answers.",
        "What it says about reading other people is a first impression rather than a clear picture.",
    ), variance=Variance.MIXED),
    _t("H05_global_low_confidence", Section.SAFETY, ANCHOR_DIMENSION, _lines(
        "This comparison is built from the data currently available and may not cover every situation.",
        "People's mental patterns are usually changeable and depend on circumstances.",
    ), variance=Variance.MIXED, scope=Scope.GLOBAL_LOW_CONFIDENCE),
    _t("H06_global_very_low_confidence", Section.SAFETY, ANCHOR_DIMENSION, _lines(
        "There is too little data to compare these two profiles reliably.",
        "Treat anything shown here as a rough starting point and try the comparison again with complete answers.",
    ), variance=Variance.MIXED, scope=Scope.GLOBAL_VERY_LOW_CONFIDENCE),
]


DEFAULT_TEMPLATES: tuple[Template, ...] = tuple(
    _DOMINANT_DIFFERENCE
    + _GLOBAL_SAFETY
    + _MENTAL_MAP
    + _KEY_DIFFERENCES
    + _LOOP
    + _FELT_EXPERIENCE
    + _TRIGGERS
    + _SAFETY
    + _LOW_CONFIDENCE
)
