"""Content templates filled from an analysis result.

Each template is a ``string.Template`` draft for one publishing format.
Bracketed text such as ``[Tip 1]`` is left for the author to fill in;
everything else comes from the analysis: the topic, the session length,
the struggle score and the top-ranked idea.
"""

from __future__ import annotations

import math
import re
from string import Template

from pydantic import BaseModel, ConfigDict

from siphon.errors import UnknownTemplateError
from siphon.models import AnalysisResult, Cluster

DEFAULT_TOPIC = "development"
STRUGGLE_THRESHOLD = 50


TWITTER_THREAD = Template("""\
🧵 THREAD: ${title}

1/ Just spent ${duration} minutes working on ${topic}.

${thread_opening}

---

2/ The problem:
[Describe the specific problem you were trying to solve]

---

3/ What I tried first:
[Your initial approach that didn't work]

---

4/ The breakthrough:
[What actually worked and why]

---

5/ Key takeaway:
${hook}

---

6/ If you're facing something similar:
- [Tip 1]
- [Tip 2]
- [Tip 3]

---

7/ Follow for more ${topic} tips!

#${hashtag} #coding #programming
""")


BLOG_POST = Template("""\
# ${title}

## Meta
- **Target keyword:** ${topic}
- **Word count target:** 1500-2000
- **Reading time:** 7-10 minutes

---

## Hook / Introduction

${hook}

- What problem does this solve?
- Why should the reader care?
- What will they learn?

---

## The Problem

- Context: When does this problem occur?
- Pain points: What makes it frustrating?
- Why existing solutions fall short

---

## My Journey

Share your experience (${duration} minutes of work, ${struggle}% struggle score):

### What I Tried First
- Approach 1: [description]
- Approach 2: [description]

### The Breakthrough Moment
- What clicked
- The "aha" insight

---

## The Solution

### Step 1: [Setup]
### Step 2: [Core Implementation]
### Step 3: [Edge Cases]

---

## Key Takeaways

1. **[Lesson 1]:** Brief explanation
2. **[Lesson 2]:** Brief explanation
3. **[Lesson 3]:** Brief explanation

---

**Tags:** ${blog_tags}
""")


VIDEO_SCRIPT = Template("""\
# VIDEO SCRIPT: ${title}

## Video Details
- **Length:** ${video_length} minutes
- **Style:** Tutorial / Walkthrough
- **Thumbnail idea:** [Before/After code or frustrated → happy dev]

---

## HOOK (0:00 - 0:30)
*[On camera, energetic]*

"${hook}"

---

## INTRO (0:30 - 1:00)

"Hey everyone, [name] here. Today we're diving into ${topic}."

---

## THE PROBLEM (1:00 - 2:00)
*[Screen recording]*

"Let me show you the problem..."

---

## SOLUTION (2:00 - 8:00)
*[Screen recording with voiceover]*

- [Setup step]
- [Core solution]
- [Polish]

---

## RECAP (8:00 - 9:00)

1. [Key takeaway 1]
2. [Key takeaway 2]
3. [Key takeaway 3]

---

## DESCRIPTION TEMPLATE
${title} | Full Tutorial

#${hashtag} #programming #tutorial
""")


NEWSLETTER = Template("""\
# 📬 Dev Insights Weekly

*${date_long}*

---

Hey friend,

This week I spent ${duration} minutes deep in code, and here's what I learned.

---

## 🎯 This Week's Focus

${focus_lines}

---

## 💡 Key Insights

${insight_sections}

---

## 🔥 Struggle of the Week

Difficulty score: **${struggle}%**

${newsletter_struggle}

[Share your biggest challenge and how you overcame it]

---

That's all for this week!

Happy coding,
[Your name]
""")


LINKEDIN_POST = Template("""\
${hook}

Here's what happened:

I was working on ${topic} when I ran into a wall.
${linkedin_struggle}

After ${duration} minutes of debugging, I discovered:

${angle}

3 lessons from this experience:

1️⃣ [Lesson 1]

2️⃣ [Lesson 2]

3️⃣ [Lesson 3]

The takeaway?
${first_evidence}

---

What's the last technical challenge that taught you something unexpected?

#${hashtag} #SoftwareEngineering #Programming
""")


TUTORIAL = Template("""\
# Tutorial: ${topic}

## Prerequisites

- [ ] [Requirement 1]
- [ ] [Requirement 2]

## What You'll Learn

1. [Outcome 1]
2. [Outcome 2]

---

## Step 1: Setup

```bash
# Installation commands
```

## Step 2: Basic Implementation

## Step 3: Testing

## Step 4: Production Ready

---

## Troubleshooting

**Problem:** [Description]
**Solution:** [Fix]

---

*Questions? Leave a comment below!*
""")


DEBUGGING_STORY = Template("""\
# The ${topic} Bug That Took Me ${duration} Minutes

*A debugging story with a ${story_ending} ending*

---

## The Setup

It started innocently enough. I was working on [project] when...

## What I Tried (And Why It Didn't Work)

### Attempt 1: [The obvious fix]
*Result: Still broken*

### Attempt 2: [The Stack Overflow solution]
*Result: Different error*

## The Breakthrough

After ${duration} minutes, I finally realized...

## Lessons Learned

1. **[Lesson 1]**
2. **[Lesson 2]**

---

*Have you encountered something similar? Share your debugging war stories in the comments!*
""")


BEFORE_AFTER = Template("""\
🔄 ${topic_upper} BEFORE vs AFTER

A thread on writing better code 🧵

---

❌ BEFORE:

```
// Code before the change
```

---

✅ AFTER:

```
// Code after the change
```

---

What changed?

1. [Improvement 1]
2. [Improvement 2]

---

Save this for later! 🔖

#${hashtag} #CleanCode #CodeReview
""")


TIL = Template("""\
TIL: ${title} 🤯

${hook}

Why this matters:
→ [Benefit 1]
→ [Benefit 2]

Source: [Where you learned this]

#TIL #${hashtag} #DevTips
""")


class ContentTemplate(BaseModel):
    """A named draft template plus the text used when no idea was generated."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    label: str
    description: str
    body: Template
    title_fallback: str = "${topic}"
    hook_fallback: str = "[Share the main lesson]"

    def render(self, result: AnalysisResult, cluster: Cluster | None = None) -> str:
        return self.body.substitute(_template_context(self, result, cluster))


TEMPLATES: tuple[ContentTemplate, ...] = (
    ContentTemplate(
        name="twitter_thread",
        label="Twitter/X Thread",
        description="A multi-tweet thread format for sharing insights",
        body=TWITTER_THREAD,
        title_fallback="What I learned about ${topic} today",
    ),
    ContentTemplate(
        name="blog_post",
        label="Blog Post Outline",
        description="A structured blog post outline with SEO considerations",
        body=BLOG_POST,
        title_fallback="A Developer's Guide to ${topic}",
        hook_fallback="Start with a relatable problem about ${topic}...",
    ),
    ContentTemplate(
        name="video_script",
        label="Video Script",
        description="A script outline for YouTube or tutorial videos",
        body=VIDEO_SCRIPT,
        title_fallback="Mastering ${topic}",
        hook_fallback=(
            "Have you ever struggled with ${topic}? In the next few minutes, "
            "I'll show you exactly how to solve it."
        ),
    ),
    ContentTemplate(
        name="newsletter",
        label="Newsletter Edition",
        description="A weekly newsletter format with insights and resources",
        body=NEWSLETTER,
    ),
    ContentTemplate(
        name="linkedin_post",
        label="LinkedIn Post",
        description="Professional social post format for LinkedIn",
        body=LINKEDIN_POST,
        hook_fallback="I just learned something valuable about ${topic}.",
    ),
    ContentTemplate(
        name="tutorial",
        label="Step-by-Step Tutorial",
        description="A detailed tutorial format with code examples",
        body=TUTORIAL,
    ),
    ContentTemplate(
        name="debugging_story",
        label="Debugging Story",
        description="Narrative-style post about solving a tricky bug",
        body=DEBUGGING_STORY,
    ),
    ContentTemplate(
        name="before_after",
        label="Before/After Code",
        description="Show code transformation with before and after examples",
        body=BEFORE_AFTER,
    ),
    ContentTemplate(
        name="til",
        label="TIL (Today I Learned)",
        description="Quick learning share format",
        body=TIL,
        title_fallback="Something cool about ${topic}",
        hook_fallback="[Share your discovery]",
    ),
)


def get_templates() -> tuple[ContentTemplate, ...]:
    """All registered templates, in display order."""
    return TEMPLATES


def get_template(name: str) -> ContentTemplate:
    """Look up a template by name.

    Raises:
        UnknownTemplateError: If no template has that name.
    """
    for template in TEMPLATES:
        if template.name == name:
            return template
    names = ", ".join(t.name for t in TEMPLATES)
    raise UnknownTemplateError(f"Unknown template: {name} (choose one of: {names})")


def render_template(
    name: str,
    result: AnalysisResult,
    cluster: Cluster | None = None,
) -> str:
    """Fill the named template from *result*, focused on *cluster* if given."""
    return get_template(name).render(result, cluster)


def _template_context(
    template: ContentTemplate,
    result: AnalysisResult,
    cluster: Cluster | None,
) -> dict[str, str]:
    summary = result.summary
    topic = DEFAULT_TOPIC
    if cluster is not None:
        topic = cluster.topic
    elif summary.top_topics:
        topic = summary.top_topics[0].topic

    duration = result.time_range.duration_minutes if result.time_range else 0
    struggle = summary.struggle_score
    struggling = struggle > STRUGGLE_THRESHOLD
    idea = result.ideas[0] if result.ideas else None

    # Fallback text may itself mention the topic
    title = idea.title if idea else Template(template.title_fallback).substitute(topic=topic)
    hook = idea.hook if idea else Template(template.hook_fallback).substitute(topic=topic)

    blocks = math.ceil(duration / 10)
    blog_tags = [topic, "tutorial", *(t.topic for t in summary.top_topics[1:4])]

    focus = "\n".join(
        f"**{t.topic}** - {t.count} activities over {t.time_minutes} minutes"
        for t in summary.top_topics[:3]
    )
    insights = "\n\n".join(
        f"### {i}. {item.title}\n\n{item.hook}\n\n"
        f"**Format:** {item.suggested_format.value} | **Confidence:** {item.confidence.value}"
        for i, item in enumerate(result.ideas[:3], start=1)
    )

    date_long = ""
    if result.time_range is not None:
        end = result.time_range.end
        date_long = f"{end:%A}, {end:%B} {end.day}, {end.year}"

    return {
        "topic": topic,
        "topic_upper": topic.upper(),
        "hashtag": re.sub(r"\s+", "", topic),
        "duration": str(duration),
        "struggle": str(struggle),
        "title": title,
        "hook": hook,
        "angle": idea.angle if idea else "[Your key insight]",
        "first_evidence": (
            idea.evidence[0] if idea and idea.evidence else "[Your main conclusion]"
        ),
        "video_length": f"{blocks * 2}-{blocks * 3}",
        "blog_tags": ", ".join(blog_tags),
        "date_long": date_long,
        "focus_lines": focus or "[No topics recorded]",
        "insight_sections": insights or "[No ideas yet]",
        "thread_opening": (
            f"It was a struggle ({struggle}% difficulty), but I figured it out."
            if struggling
            else "Here's what I discovered:"
        ),
        "linkedin_struggle": f"(Struggle score: {struggle}% - it was rough!)" if struggling else "",
        "newsletter_struggle": (
            "It was a tough week! But struggle leads to growth. "
            "Here's what made it challenging..."
            if struggling
            else "Relatively smooth sailing this week. Here's what went well..."
        ),
        "story_ending": "frustrating" if struggling else "satisfying",
    }
