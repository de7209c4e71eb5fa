import os
import re
import shutil
import subprocess
import sys

from dotenv import load_dotenv

load_dotenv()


def run_step(command, step_name):
    print(f"\n🚀 Running Step: {step_name}...")
    try:
        process = subprocess.Popen(command, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True)

        # Output is kept so the channel id can be read from step 1
        full_output = ""
        for line in process.stdout:
            print(line, end="")
            full_output += line

        process.wait()

        if process.returncode != 0:
            print(f"❌ Error in {step_name}")
            return False, full_output

        return True, full_output
    except OSError as e:
        print(f"❌ Exception in {step_name}: {e}")
        return False, str(e)


def main():
    if len(sys.argv) < 2:
        print("Usage: python3 main.py \"CHANNEL\"")
        print("  CHANNEL can be @handle, a youtube.com channel URL, or a channel ID")
        sys.exit(1)

    channel_input = sys.argv[1]
    output_folder = os.getenv("OUTPUT_FOLDER", ".tmp/channel_analyses")

    os.makedirs("reports", exist_ok=True)

    # Step 1: Fetch Data
    success, output = run_step(
        [sys.executable, "-m", "tools.youtube_fetch_channel_data", channel_input],
        "Fetching Channel Data",
    )
    if not success:
        sys.exit(1)

    match = re.search(r"Channel ID: ([A-Za-z0-9_-]+)", output)
    if not match:
        print("❌ Could not determine Channel ID from output.")
        sys.exit(1)

    channel_id = match.group(1).strip()
    print(f"✅ Identified Channel ID: {channel_id}")

    raw_data_path = os.path.join(output_folder, channel_id, "raw_data.json")
    analysis_path = os.path.join(output_folder, channel_id, "analysis.json")

    # Step 2: Analyze
    success, _ = run_step(
        [sys.executable, "-m", "tools.youtube_analyze_channel", raw_data_path],
        "Analyzing Channel",
    )
    if not success:
        sys.exit(1)

    # Step 3: Copy analysis to reports directory
    target_analysis = f"reports/{channel_id}_analysis.json"
    if os.path.exists(analysis_path):
        try:
            shutil.copy(analysis_path, target_analysis)
            print(f"\n✨ Final analysis copied to: {target_analysis}")
        except OSError as e:
            print(f"⚠️ Could not copy analysis to reports/ archive: {e}")

    print("\n✅ Analysis Pipeline Complete!")


if __name__ == "__main__":
    main()
