"""
Interactive chat loop for Chiron

Backend and model come from the environment (see chiron/config.py).
"""

import asyncio
import sys
import uuid
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from chiron.agents import AgentContext, AgentCoordinator, ResearchAgent
from chiron.config import Config
from chiron.errors import GenerationError
from chiron.models import LLMFactory
from chiron.safety import CrisisDetector, SafetyFilters
from chiron.safety.crisis_detection import CRISIS_RESOURCES

SUPPORT_PROMPT = """You are Chiron, a supportive AI companion focused on mental wellness.
You provide empathetic listening and gentle guidance but never give medical advice or diagnoses.
Always remind users you're not a replacement for professional mental health care.

Current therapy phase: {phase}
Session count: {session_count}

Conversation context:
{history}

Respond empathetically to the most recent user message."""


async def chat():
    for warning in Config.validate():
        print(f"⚠️  {warning}")

    generator = LLMFactory.create()
    model_name = generator.model

    context = AgentContext(
        session_id=str(uuid.uuid4()),
        model_name=model_name,
        generator=generator
    )
    coordinator = AgentCoordinator(context=context)
    coordinator.register_agent(ResearchAgent(generator=generator))

    crisis_detector = CrisisDetector()
    safety_filters = SafetyFilters()

    print("Chiron Mental Health SLM System")
    print(f"Using {Config.summary()}")
    print("Type 'quit' to exit\n")
    print("⚠️  IMPORTANT: I am an AI assistant, not a mental health professional.")
    print("For immediate crisis support, contact:")
    print(CRISIS_RESOURCES + "\n")

    try:
        while True:
            text = (await asyncio.to_thread(input, "You: ")).strip()
            if not text:
                continue
            if text.lower() == "quit":
                print("Goodbye! Take care of yourself.")
                break

            if crisis_detector.detect_crisis(text):
                print("\n🚨 I'm concerned about what you've shared. Your safety is important.")
                print("Please reach out for immediate help:")
                print(CRISIS_RESOURCES)
                print("• Or go to your nearest emergency room\n")
                continue

            text = safety_filters.filter_input(text)

            try:
                result = await coordinator.process_input(text)
                if result.agent_used == "none":
                    history = "\n".join(coordinator.context.conversation_history[-10:] + [f"User: {text}"])
                    reply = await generator.generate(model_name, SUPPORT_PROMPT.format(
                        phase=context.therapeutic_phase,
                        session_count=context.session_count,
                        history=history
                    ))
                else:
                    reply = result.content
            except GenerationError as e:
                print(f"Error: {e}\n")
                continue

            reply = safety_filters.filter_output(reply)
            print(f"Chiron: {reply}\n")

            coordinator.record_exchange("User", text)
            coordinator.record_exchange("Assistant", reply)
    finally:
        await coordinator.cleanup()


if __name__ == "__main__":
    asyncio.run(chat())
