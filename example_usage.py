"""
Simple usage example for FaqBot

Shows the confidence tiers and teaching a new pair without the CLI.
"""

from faqbot import ChatbotCore, KnowledgeBase
from faqbot.knowledge import seed_default


def main():
    print("=" * 60)
    print("FaqBot Simple Example")
    print("=" * 60)

    bot = ChatbotCore(seed_default(KnowledgeBase()))

    for question in [
        "hello",
        "What's your name?",
        "what can you save",
        "where do you live?",
    ]:
        print(f"\nQuestion: {question}")
        print(f"Answer:\n{bot.respond(question)}")

    print("\n" + "=" * 60)
    print("\nTeaching a new pair...")
    bot.teach("where do you live", "I live in your terminal.")
    print(f"Answer:\n{bot.respond('where do you live?')}")

    print("\nRun the full CLI with: faqbot  (or: python -m faqbot)")
    print("=" * 60)


if __name__ == "__main__":
    main()
