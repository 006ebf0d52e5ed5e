"""
CLI interface for trying out the agent weaver.
"""

import asyncio
import json
import sys
from typing import List, Optional

from core.logging_config import configure_logging_from_settings
from .errors import AgentWeaverError, ValidationError, ComplianceError
from .generator import AgentWeaverService
from .models import ContractOptions, GenerationMode


def print_usage():
    print("Usage: python -m services.agent_weaver.cli <description> [options]")
    print("\nOptions:")
    print("  --offline              Generate without calling the completion service")
    print("  --no-examples          Ask for a contract without request/response examples")
    print("  --webhooks             Ask for webhook definitions in the contract")
    print("  --output <file>        Write the workflow and contract to a JSON file")
    print("\nExamples:")
    print("  python -m services.agent_weaver.cli 'Monitor a directory and summarize new files daily'")
    print("  python -m services.agent_weaver.cli 'Watch pod restarts and alert the on-call channel' --offline")


async def main(argv: Optional[List[str]] = None):
    """Main CLI function"""
    args = sys.argv[1:] if argv is None else argv
    if not args or args[0].startswith("--"):
        print_usage()
        sys.exit(1)

    description = args[0]
    mode = None
    include_examples = True
    include_webhooks = False
    output_file = None

    i = 1
    while i < len(args):
        if args[i] == "--offline":
            mode = GenerationMode.OFFLINE
            i += 1
        elif args[i] == "--no-examples":
            include_examples = False
            i += 1
        elif args[i] == "--webhooks":
            include_webhooks = True
            i += 1
        elif args[i] == "--output" and i + 1 < len(args):
            output_file = args[i + 1]
            i += 2
        else:
            i += 1

    configure_logging_from_settings()

    try:
        weaver = AgentWeaverService(mode=mode)
        options = ContractOptions(include_examples=include_examples, include_webhooks=include_webhooks)

        print("🧵 Agent Weaver CLI")
        print(f"   Description: {description}")
        print(f"   Mode: {weaver.mode.value}")
        print()

        workflow, contract = await weaver.weave(description, options)

        print(f"✅ Workflow generated: {workflow.name} ({workflow.id})")
        print(f"   Modules: {', '.join(module.name for module in workflow.required_modules)}")
        print(f"   Steps: {len(workflow.steps)}")
        print(f"   Endpoints: {', '.join(contract['paths'].keys())}")

        result = {"workflow": workflow.to_dict(), "contract": contract}
        if output_file:
            with open(output_file, 'w') as f:
                json.dump(result, f, indent=2)
            print(f"\n💾 Saved to: {output_file}")
        else:
            print(json.dumps(result, indent=2))

    except ValidationError as e:
        print(f"❌ Invalid {e.field or 'input'}: {e}")
        sys.exit(1)
    except ComplianceError as e:
        print("❌ Generated contract is not compliant:")
        for violation in e.violations:
            print(f"   - {violation}")
        sys.exit(1)
    except AgentWeaverError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n⏹️  Operation cancelled by user")
        sys.exit(1)


def run():
    """Console script entry point"""
    asyncio.run(main())


if __name__ == "__main__":
    run()
