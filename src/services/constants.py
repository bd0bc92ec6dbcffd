"""
Constants and shared text for tracking, analysis and AI services.
"""
from typing import Dict, List
from src.models.phase import CyclePhase
from src.models.risk import RiskType, Severity

# Cycle phase boundaries (inclusive last cycle day of each phase).
# Days past the user's cycle length are EXPECTED_PERIOD.
PHASE_BOUNDARIES = [
    (5, CyclePhase.MENSTRUAL),
    (13, CyclePhase.FOLLICULAR),
    (15, CyclePhase.OVULATION),
]

# Risk flag thresholds
HEAVY_FLOW_DAYS_THRESHOLD = 3
LOW_ENERGY_DAYS_THRESHOLD = 3
LONG_CYCLE_THRESHOLD = 35
HIGH_PAIN_LEVEL = 7
HIGH_PAIN_DAYS_THRESHOLD = 3
AVERAGE_PAIN_THRESHOLD = 7
POOR_MOOD_RATIO = 0.5
URGENT_PAIN_THRESHOLD = 9
TOP_SYMPTOM_COUNT = 5
REGULARITY_MIN_LOGS = 14
REPORT_CONTEXT_LOG_LIMIT = 10

RISK_FLAG_DETAILS = {
    RiskType.ANEMIA: {
        "severity": Severity.MEDIUM,
        "description": "Heavy bleeding combined with persistent fatigue may indicate iron deficiency",
        "recommendation": "Consider getting your iron levels checked with a blood test",
    },
    RiskType.PCOS: {
        "severity": Severity.MEDIUM,
        "description": "Cycles longer than 35 days may indicate hormonal imbalance",
        "recommendation": "Discuss cycle irregularities with your gynecologist",
    },
    RiskType.ENDOMETRIOSIS: {
        "severity": Severity.MEDIUM,
        "description": "Consistent severe pelvic pain may warrant further investigation",
        "recommendation": "Consult a specialist about your pain levels",
    },
    RiskType.GENERAL: {
        "severity": Severity.LOW,
        "description": "Frequent low mood detected in your logs",
        "recommendation": "Consider speaking with a healthcare provider about your emotional health",
    },
}

# Lifestyle recommendation attached to each triggered flag
RISK_FLAG_ADVICE = {
    RiskType.ANEMIA: "Increase iron-rich foods like spinach, red meat, and legumes",
    RiskType.ENDOMETRIOSIS: "Keep a detailed pain diary to share with your doctor",
    RiskType.GENERAL: "Practice stress-reduction techniques like meditation or gentle exercise",
}

ANALYSIS_NOT_ENOUGH_DATA = {
    "summary": "Not enough data to analyze. Please log more symptoms.",
    "recommendations": ["Continue logging your symptoms daily for better insights."],
}

ANALYSIS_SUMMARIES = {
    "clear": "Your recent logs look good! No concerning patterns detected.",
    Severity.HIGH: "Some patterns in your logs may need attention. Please consult a healthcare provider.",
    "monitor": "A few patterns worth monitoring have been identified. Review the flags below.",
}

ANALYSIS_CLEAR_RECOMMENDATION = "Keep up your consistent logging habits"

ANALYSIS_GENERAL_RECOMMENDATIONS = [
    "Stay hydrated and maintain regular sleep patterns",
    "Continue tracking your symptoms for better insights",
]

# Health report risk assessment entries, keyed by the matching risk flag
REPORT_RISK_ASSESSMENTS = {
    RiskType.ANEMIA: {
        "condition": "Iron Deficiency/Anemia",
        "risk_level": "medium",
        "confidence": "medium",
        "indicators": ["Heavy menstrual bleeding", "Persistent fatigue/low energy"],
        "recommendation": "Consider getting iron levels checked with a blood test",
    },
    RiskType.PCOS: {
        "condition": "Hormonal Imbalance/PCOS",
        "risk_level": "medium",
        "confidence": "low",
        "indicators": ["Average cycle length above 35 days"],
        "recommendation": "Discuss cycle irregularities with a gynecologist",
    },
    RiskType.ENDOMETRIOSIS: {
        "condition": "Endometriosis/Severe Dysmenorrhea",
        "risk_level": "medium",
        "confidence": "low",
        "indicators": ["Consistent severe pelvic pain"],
        "recommendation": "Discuss pain management options with a gynecologist",
    },
    RiskType.GENERAL: {
        "condition": "Mood Disturbance/PMDD",
        "risk_level": "low",
        "confidence": "medium",
        "indicators": ["Frequent low mood correlating with cycle"],
        "recommendation": "Consider speaking with a healthcare provider about emotional health support",
    },
}

REPORT_LIFESTYLE_TIPS = [
    "Track symptoms at the same time each day for consistency",
    "Note any dietary changes that correlate with symptom changes",
    "Regular exercise can help reduce cramping and improve mood",
    "Consider keeping a food diary alongside symptom tracking",
]

URGENT_PAIN_FLAG = "Very high pain levels detected - please consult a healthcare provider"

CHAT_SYSTEM_PROMPT = """You are Ovira AI, a compassionate and knowledgeable women's health assistant. Your role is to provide supportive, educational information about women's health topics including menstrual health, reproductive wellness, and general well-being.

IMPORTANT GUIDELINES:
1. Be empathetic, warm, and use stigma-free language
2. NEVER prescribe medications or provide medical diagnoses
3. ALWAYS recommend consulting healthcare professionals for medical concerns
4. Provide educational information based on established medical knowledge
5. Address sensitive topics with care, respect, and without judgment
6. If asked about emergencies or severe symptoms, immediately advise seeking medical care
7. Keep responses concise but informative (2-3 paragraphs max)
8. Use simple, accessible language

TOPICS YOU CAN HELP WITH:
- Menstrual cycle tracking and understanding
- PMS and period symptoms
- General reproductive health education
- Lifestyle tips for menstrual wellness
- When to see a doctor
- Emotional support and validation

TOPICS TO REDIRECT TO DOCTORS:
- Specific medical diagnoses
- Medication recommendations
- Severe pain or unusual symptoms
- Pregnancy-related medical advice
- Fertility treatments

Remember: You are a supportive companion, not a replacement for medical care."""

REPORT_PROMPT = """You are a medical data analyst AI. Analyze the provided menstrual health symptom logs and generate a comprehensive, doctor-friendly health report.

IMPORTANT: Return ONLY valid JSON. No markdown, no code blocks, just pure JSON.

Based on the symptom data provided, generate a report with this exact JSON structure:
{
    "executiveSummary": "2-3 sentence professional summary for healthcare providers",
    "cycleInsights": {
        "overallPattern": "Description of cycle patterns observed",
        "averagePainLevel": 0.0,
        "flowPatternDescription": "Description of flow patterns",
        "cycleRegularity": "regular" | "irregular" | "insufficient_data"
    },
    "symptomAnalysis": {
        "mostFrequentSymptoms": [{"symptom": "name", "count": 0, "percentage": 0}],
        "painTrend": "increasing" | "decreasing" | "stable" | "variable",
        "moodPattern": "Description of mood patterns",
        "sleepQuality": "Description of sleep patterns",
        "energyPattern": "Description of energy patterns",
        "notableCorrelations": ["correlation 1", "correlation 2"]
    },
    "riskAssessment": [
        {
            "condition": "Condition name",
            "riskLevel": "low" | "medium" | "high",
            "confidence": "low" | "medium" | "high",
            "indicators": ["indicator 1", "indicator 2"],
            "recommendation": "What to do"
        }
    ],
    "recommendations": [
        "Detailed recommendation 1",
        "Detailed recommendation 2"
    ],
    "questionsForDoctor": [
        "Suggested question 1 to ask healthcare provider",
        "Suggested question 2"
    ],
    "lifestyleTips": [
        "Personalized tip based on data",
        "Another personalized tip"
    ],
    "urgentFlags": ["Any urgent concerns that need immediate attention"] or []
}

Analyze patterns carefully:
- Look for anemia indicators (heavy flow + fatigue)
- Check for PCOS signs (irregular cycles, specific symptoms)
- Identify endometriosis markers (severe pain patterns)
- Note mood correlations with cycle phases
- Identify sleep and energy patterns
- Find symptom clusters and correlations

Be thorough but avoid false alarms. Base assessments on actual data patterns."""

# Bedrock models get stricter non-diagnostic instructions
BEDROCK_REPORT_PROMPT = """You are a medical data analyst AI. Generate a comprehensive, doctor-friendly health report based on symptom logs.

CRITICAL RULES:
1. Provide ONLY non-diagnostic statistical analysis
2. Use decision-support language, NOT diagnostic language
3. Encourage professional medical consultation
4. Return valid JSON only
5. Never use words: diagnose, treatment, cure, disease, prescribe

Return JSON with this structure:
{
    "executiveSummary": "Professional summary for healthcare providers (non-diagnostic)",
    "cycleInsights": {
        "overallPattern": "Description",
        "averagePainLevel": 0.0,
        "flowPatternDescription": "Description",
        "cycleRegularity": "regular|irregular|insufficient_data"
    },
    "symptomAnalysis": {
        "mostFrequentSymptoms": [{"symptom": "name", "count": 0, "percentage": 0}],
        "painTrend": "increasing|decreasing|stable|variable",
        "moodPattern": "Description",
        "sleepQuality": "Description",
        "energyPattern": "Description",
        "notableCorrelations": ["correlation 1"]
    },
    "riskAssessment": [
        {
            "condition": "Statistical indicator name",
            "riskLevel": "low|medium|high",
            "confidence": "low|medium|high",
            "indicators": ["indicator 1"],
            "recommendation": "Consult healthcare provider about..."
        }
    ],
    "recommendations": ["Recommendation 1"],
    "questionsForDoctor": ["Question 1"],
    "lifestyleTips": ["Tip 1"],
    "urgentFlags": []
}"""

BEDROCK_CHAT_PROMPT = """You are Ovira AI, a compassionate women's health assistant providing educational information and decision-support.

CRITICAL GUIDELINES:
1. Be empathetic and use stigma-free language
2. NEVER diagnose or prescribe treatment
3. ALWAYS encourage consulting healthcare professionals
4. Provide educational information only
5. Keep responses concise (2-3 paragraphs)
6. Use simple, accessible language
7. This is DECISION-SUPPORT only, not medical advice

PROHIBITED: Never use diagnostic language, prescribe medications, or provide treatment recommendations.

TOPICS YOU CAN HELP WITH:
- Menstrual cycle education
- General reproductive health information
- Lifestyle tips for wellness
- When to see a doctor
- Emotional support"""

FALLBACK_RESPONSES: Dict[str, str] = {
    "default": (
        "I'm here to help with women's health questions. While I'm having trouble "
        "connecting to my AI service right now, I can tell you that it's always a good "
        "idea to track your symptoms regularly and consult with a healthcare provider for "
        "personalized advice. Is there something specific you'd like to know about?"
    ),
    "pain": (
        "Period pain is very common, but if it's severe or affecting your daily life, "
        "please consult a healthcare provider. Some general tips: apply heat to your lower "
        "abdomen, stay hydrated, gentle exercise can help, and over-the-counter pain "
        "relievers may provide relief. Always follow the dosage instructions."
    ),
    "mood": (
        "Mood changes during your cycle are normal due to hormonal fluctuations. Self-care "
        "strategies like regular sleep, exercise, and stress management can help. If mood "
        "changes are severe or impacting your life significantly, consider speaking with a "
        "healthcare provider about PMDD."
    ),
    "cycle": (
        "A typical menstrual cycle lasts 21-35 days, with bleeding lasting 2-7 days. If "
        "your cycle is irregular, very heavy, or you're experiencing unusual symptoms, it's "
        "worth discussing with your doctor."
    ),
}

# Checked in order; first topic with a matching keyword wins
FALLBACK_KEYWORDS: List[tuple] = [
    ("pain", ("pain", "cramp")),
    ("mood", ("mood", "feel")),
    ("cycle", ("cycle", "period")),
]

REPORT_FALLBACK_RECOMMENDATIONS = {
    "tracking": "Continue tracking symptoms consistently for better pattern recognition",
    "sleep_low": "Consider improving sleep hygiene - aim for 7-9 hours",
    "sleep_ok": "Maintain your current sleep schedule",
    "pain_high": "Discuss pain management strategies with your healthcare provider",
    "pain_ok": "Monitor pain levels and note any changes",
    "hydration": "Stay hydrated, especially during menstruation",
    "exercise": "Regular gentle exercise can help manage symptoms",
}

REPORT_DOCTOR_QUESTIONS = {
    "normal_range": "Are my symptoms within normal range for my age?",
    "heavy_flow": "Should I be concerned about my heavy flow days?",
    "pain": "What pain management options would you recommend?",
    "lifestyle": "Are there any lifestyle changes that could help with my symptoms?",
}

# Fallback report thresholds
RECOMMENDED_SLEEP_HOURS = 7
PAIN_DISCUSSION_THRESHOLD = 5
PAIN_QUESTION_THRESHOLD = 6
