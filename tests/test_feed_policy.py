import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from feedpolicy import DEFAULT_RULES, ModerationError, enforce, enforce_comment, evaluate, evaluate_comment
from feedpolicy.models import CandidatePost


# ---------------------------------------------------------------------------
# End-to-end fixtures
# ---------------------------------------------------------------------------

def test_launch_post_is_approved():
    result = evaluate({
        "content": "Celebrating a huge launch with the team today! 🎉",
        "link": "https://gigvora.com/launch",
    })
    assert result.decision == "approve"
    assert result.reasons == []
    assert result.link == "https://gigvora.com/launch"


def test_banned_term_is_rejected():
    result = evaluate({"content": "This is a secret porn link"})
    assert result.decision == "reject"
    assert 'The term "porn" is not permitted on the community feed.' in result.reasons


def test_shouting_spam_with_shortener_is_rejected():
    result = evaluate({
        "content": "CLICK HERE CLICK HERE CLICK HERE CLICK HERE CLICK HERE",
        "link": "https://tinyurl.com/spam-offer",
    })
    assert result.decision == "reject"
    assert any("links" in reason.lower() for reason in result.reasons)
    assert "blocked_domain" in {signal.type for signal in result.signals}


def test_enforce_raises_for_follower_spam():
    with pytest.raises(ModerationError) as excinfo:
        enforce({
            "content": "buy followers now buy followers now buy followers now",
            "link": "https://bit.ly/suspicious",
        })
    error = excinfo.value
    assert error.message == config.DEFAULT_ERROR_MESSAGE
    assert error.reasons
    assert any("buy followers" in reason for reason in error.reasons)
    assert error.signals


def test_empty_post_is_rejected():
    result = evaluate({"content": "", "summary": ""})
    assert result.decision == "reject"
    assert result.reasons == [config.EMPTY_POST_MESSAGE]


def test_compliant_post_passes_two_step_enforcement():
    evaluation = evaluate({
        "title": "Weekly update",
        "summary": "Progress from the team",
        "content": "We shipped two features and fixed five bugs.",
        "attachments": [{"type": "image", "url": "https://cdn.example.com/update.png"}],
    })
    assert evaluation.decision == "approve"

    enforcement = enforce(evaluation)
    assert enforcement is evaluation
    assert enforcement.reasons == []
    assert len(enforcement.attachments) == 1


def test_enforce_on_rejected_evaluation_does_not_reevaluate():
    evaluation = evaluate({"content": "This post promotes porn services."})
    with pytest.raises(ModerationError) as excinfo:
        enforce(evaluation, {"errorMessage": "Your post was blocked."})
    assert excinfo.value.message == "Your post was blocked."
    assert excinfo.value.reasons == evaluation.reasons
    assert "not permitted" in excinfo.value.reasons[0]


# ---------------------------------------------------------------------------
# Decision ordering
# ---------------------------------------------------------------------------

def test_length_limit_fires_before_banned_terms():
    result = evaluate({"content": "porn " * 1200})
    assert result.decision == "reject"
    assert result.reasons == [config.TOO_LONG_MESSAGE.format(limit=DEFAULT_RULES.max_characters)]


def test_rule_override_changes_length_limit():
    result = evaluate(
        {"content": "Celebrating a huge launch with the team today!"},
        {"rules": {"maxCharacters": 10}},
    )
    assert result.reasons == [config.TOO_LONG_MESSAGE.format(limit=10)]


def test_banned_terms_one_reason_each():
    result = evaluate({"content": "porn and x.x.x are both here", "title": "nsfw"})
    assert result.reasons == [
        'The term "porn" is not permitted on the community feed.',
        'The term "xxx" is not permitted on the community feed.',
        'The term "nsfw" is not permitted on the community feed.',
    ]


def test_zero_width_evasion_is_caught():
    result = evaluate({"content": "come see p\u200bo\u200br\u200bn here"})
    assert result.decision == "reject"


def test_medium_signals_reject_without_opt_in():
    post = {"content": "THIS IS A VERY LOUD ANNOUNCEMENT FOR EVERYONE HERE"}
    result = evaluate(post)
    assert result.decision == "reject"
    assert [signal.type for signal in result.signals] == ["shouting"]
    assert result.reasons == [result.signals[0].message]


def test_medium_signals_become_warnings_with_opt_in():
    post = {"content": "THIS IS A VERY LOUD ANNOUNCEMENT FOR EVERYONE HERE"}
    result = evaluate(post, {"allowWarnings": True})
    assert result.decision == "approve"
    assert result.reasons == []
    assert [signal.type for signal in result.signals] == ["shouting"]


def test_high_signals_reject_even_with_opt_in():
    result = evaluate(
        {"content": "Read more about our launch plans today", "link": "https://bit.ly/launch"},
        {"allow_warnings": True},
    )
    assert result.decision == "reject"
    assert [signal.type for signal in result.signals] == ["blocked_domain"]


def test_high_rejection_lists_only_high_messages():
    result = evaluate({"content": "THIS IS A VERY LOUD POST ABOUT OUR LAUNCH WOOOOOOOW"})
    assert result.decision == "reject"
    high = [signal.message for signal in result.signals if signal.severity == "high"]
    assert result.reasons == high
    assert "shouting" in {signal.type for signal in result.signals}


def test_too_few_words():
    result = evaluate({"content": "Hello team"})
    assert result.reasons == [config.TOO_SHORT_MESSAGE]


def test_summary_only_post_needs_content_words():
    result = evaluate({"summary": "A short summary of the week"})
    assert result.decision == "reject"
    assert result.reasons == [config.TOO_SHORT_MESSAGE]


# ---------------------------------------------------------------------------
# Sanitisation and options
# ---------------------------------------------------------------------------

def test_markup_is_removed_from_output():
    result = evaluate({
        "content": "<script>alert(1)</script> Shipping the new dashboard today for everyone",
        "title": "<h1>Release</h1>",
    })
    assert result.decision == "approve"
    assert "<" not in result.content
    assert result.title == "Release"


def test_malformed_link_is_discarded():
    result = evaluate({
        "content": "Shipping the new dashboard today for everyone",
        "link": "javascript:alert(1)",
    })
    assert result.decision == "approve"
    assert result.link is None


def test_extra_banned_terms_do_not_touch_defaults():
    post = {"content": "Celebrating a huge launch with the team today!"}
    result = evaluate(post, {"bannedTerms": ["launch"]})
    assert result.reasons == ['The term "launch" is not permitted on the community feed.']
    assert "launch" not in DEFAULT_RULES.banned_terms
    assert evaluate(post).decision == "approve"


def test_extra_blocked_domain():
    result = evaluate(
        {"content": "Read the full story on our blog", "link": "https://news.example.org/story"},
        {"blockedDomains": ["example.org"]},
    )
    assert result.decision == "reject"


def test_candidate_post_instances_are_accepted():
    post = CandidatePost(content="We shipped two features and fixed five bugs.")
    assert evaluate(post).decision == "approve"


@pytest.mark.parametrize("payload", [
    None,
    42,
    "just a string",
    {"content": 5},
    {"content": ["not", "text"], "summary": {"a": 1}},
    {"content": "Shipping the new dashboard today", "attachments": "nope"},
    {"content": "porn"},
    {"content": "Hi"},
    {"content": "We shipped two features and fixed five bugs."},
])
def test_reject_iff_reasons(payload):
    result = evaluate(payload)
    assert (result.decision == "reject") == (len(result.reasons) > 0)
    assert len(result.attachments) <= 4


def test_to_dict_shape():
    result = evaluate({
        "content": "THIS IS A VERY LOUD ANNOUNCEMENT FOR EVERYONE HERE",
        "attachments": [{"id": "a1", "type": "document"}],
    })
    payload = result.to_dict()
    assert set(payload) == {
        "decision", "reasons", "signals", "content", "summary", "title", "link", "attachments",
    }
    assert payload["signals"][0]["type"] == "shouting"
    assert payload["attachments"] == [
        {"id": "a1", "type": "document", "url": None, "alt": None, "caption": None},
    ]


def test_moderation_error_to_dict():
    with pytest.raises(ModerationError) as excinfo:
        enforce({"content": ""})
    payload = excinfo.value.to_dict()
    assert payload["reasons"] == [config.EMPTY_POST_MESSAGE]
    assert payload["signals"] == []


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------

def test_short_comment_is_approved():
    assert evaluate_comment("Great work!").decision == "approve"


def test_comment_with_banned_term():
    result = evaluate_comment({"body": "so much porn"})
    assert result.decision == "reject"


def test_comment_word_count_override_is_respected():
    result = evaluate_comment("Great work!", {"rules": {"minWordCount": 5}})
    assert result.reasons == [config.TOO_SHORT_MESSAGE]


def test_empty_comment_raises():
    with pytest.raises(ModerationError):
        enforce_comment("   ")
