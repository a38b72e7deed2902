#!/usr/bin/env python3
"""
ssm_smoke.py: manual smoke test of the SSM credential provider against a
real AWS account.

Steps:
  1. Create an SSM hybrid activation for a throwaway node name
  2. Print the resulting NodeConfig JSON
  3. (optional) Wait for INSTANCE_ID to deregister from SSM

Prerequisites:
  - AWS credentials in the environment (or ~/.aws) allowed to call
    ssm:CreateActivation, ssm:AddTagsToResource, ssm:DescribeInstanceInformation
    and iam:PassRole on the role below
  - Run from repo root:
        SSM_ROLE=my-ssm-role python3 scripts/ssm_smoke.py
        SSM_ROLE=my-ssm-role INSTANCE_ID=mi-0abc... python3 scripts/ssm_smoke.py
"""
import logging, os, sys, uuid

# Add SDK to path so we can import without pip install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "sdk", "python"))

import nodecreds  # noqa: E402
from nodecreds.models import Cluster, NodeSpec  # noqa: E402

ROLE         = os.environ.get("SSM_ROLE", "")
CLUSTER_NAME = os.environ.get("CLUSTER_NAME", "nodecreds-smoke")
REGION       = os.environ.get("AWS_REGION", "us-west-2")
INSTANCE_ID  = os.environ.get("INSTANCE_ID", "")

def step(n, msg): print(f"\n{'='*60}\nSTEP {n}: {msg}\n{'='*60}")
def ok(msg):   print(f"  [PASS] {msg}")
def fail(msg): print(f"  [FAIL] {msg}", file=sys.stderr); sys.exit(1)

logging.basicConfig(level=logging.INFO, format="  %(levelname)-7s %(name)s: %(message)s")

if not ROLE:
    fail("SSM_ROLE must be set to the IAM role name instances should assume")

provider = nodecreds.new_ssm_provider(ROLE, region=REGION)
node     = NodeSpec(
    name=f"smoke-{uuid.uuid4().hex[:8]}",
    cluster=Cluster(name=CLUSTER_NAME, region=REGION),
)

# ── Step 1: Create activation ────────────────────────────────────────────────
step(1, f"Create SSM activation for {node.name}")
try:
    cfg = provider.nodeadm_config(node)
except nodecreds.ActivationError as e:
    fail(str(e))
ok(f"Activation id: {cfg.spec.hybrid.ssm.activation_id}")

# ── Step 2: Show NodeConfig ──────────────────────────────────────────────────
step(2, "NodeConfig document")
print(cfg.to_json())
if not cfg.spec.hybrid.enable_credentials_file:
    fail("enableCredentialsFile should be set")
ok("NodeConfig assembled")

# ── Step 3: Deregistration ───────────────────────────────────────────────────
if not INSTANCE_ID:
    print("\nINSTANCE_ID not set, skipping deregistration check.")
    sys.exit(0)

step(3, f"Wait for {INSTANCE_ID} to deregister "
        f"(timeout {provider.settings.deregister_timeout:.0f}s)")
try:
    provider.verify_uninstall(INSTANCE_ID)
except nodecreds.DeregistrationTimeout as e:
    fail(str(e))
except nodecreds.DeregistrationError as e:
    fail(f"Inventory query failed: {e}")
ok(f"{INSTANCE_ID} no longer registered")
